import uuid
from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, Index, CheckConstraint, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Category(Base):
    __tablename__ = 'categories'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    color = Column(String(20), nullable=False, default='#3B82F6')
    created_by = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    tickets = relationship("Ticket", back_populates="category")


class Ticket(Base):
    __tablename__ = 'tickets'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default='OPEN')
    priority = Column(String(20), nullable=False, default='MEDIUM')
    # Net score: count(UP) - count(DOWN), recomputed on every vote
    votes = Column(Integer, nullable=False, default=0)
    category_id = Column(UUID(as_uuid=True), ForeignKey('categories.id'), nullable=False)
    created_by = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    assigned_to = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    closed_at = Column(DateTime(timezone=True), nullable=True)

    category = relationship("Category", back_populates="tickets")
    creator = relationship("User", foreign_keys=[created_by])
    assignee = relationship("User", foreign_keys=[assigned_to])
    comments = relationship(
        "Comment",
        back_populates="ticket",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )
    votes_list = relationship("Vote", back_populates="ticket", cascade="all, delete-orphan")

    __table_args__ = (
        Index('ix_tickets_created_by', 'created_by'),
        Index('ix_tickets_category_id', 'category_id'),
        Index('ix_tickets_status_created_at', 'status', 'created_at'),
        CheckConstraint("status in ('OPEN','IN_PROGRESS','RESOLVED','CLOSED')", name='ck_tickets_status'),
        CheckConstraint("priority in ('LOW','MEDIUM','HIGH','URGENT')", name='ck_tickets_priority'),
    )


class Comment(Base):
    __tablename__ = 'comments'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    content = Column(Text, nullable=False)
    ticket_id = Column(UUID(as_uuid=True), ForeignKey('tickets.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    ticket = relationship("Ticket", back_populates="comments")
    user = relationship("User")

    __table_args__ = (
        Index('ix_comments_ticket_id_created_at', 'ticket_id', 'created_at'),
    )


class Vote(Base):
    __tablename__ = 'votes'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String(10), nullable=False)  # UP|DOWN
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    ticket_id = Column(UUID(as_uuid=True), ForeignKey('tickets.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    ticket = relationship("Ticket", back_populates="votes_list")

    __table_args__ = (
        UniqueConstraint('user_id', 'ticket_id', name='uq_votes_user_id_ticket_id'),
        Index('ix_votes_ticket_id_type', 'ticket_id', 'type'),
        CheckConstraint("type in ('UP','DOWN')", name='ck_votes_type'),
    )
