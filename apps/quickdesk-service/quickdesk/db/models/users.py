import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class User(Base):
    __tablename__ = 'users'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(120), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    # 'END_USER'|'SUPPORT_AGENT'|'ADMIN'
    role = Column(String(20), nullable=False, default='END_USER')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        CheckConstraint("role in ('END_USER','SUPPORT_AGENT','ADMIN')", name='ck_users_role'),
    )


class RoleUpgradeRequest(Base):
    __tablename__ = 'role_upgrade_requests'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    current_role = Column(String(20), nullable=False)
    requested_role = Column(String(20), nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default='PENDING')  # PENDING|APPROVED|REJECTED
    processed_at = Column(DateTime(timezone=True), nullable=True)
    processed_by = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    user = relationship("User", foreign_keys=[user_id])
    processed_by_user = relationship("User", foreign_keys=[processed_by])

    __table_args__ = (
        Index('ix_role_upgrade_requests_status_created_at', 'status', 'created_at'),
        CheckConstraint("status in ('PENDING','APPROVED','REJECTED')", name='ck_role_upgrade_requests_status'),
    )
