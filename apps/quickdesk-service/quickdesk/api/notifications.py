"""
Notification API Endpoints

Provides REST API for reading and acknowledging in-app notifications.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from quickdesk.db.database import get_db
from quickdesk.db import models, schemas
from quickdesk.api.deps import get_current_user
from quickdesk.services.notification_service import NotificationService


router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=schemas.NotificationListResponse)
def get_notifications(
    unread_only: bool = Query(default=False, alias="unreadOnly"),
    limit: int = 50,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    """
    Get notifications for the current user.

    - **unreadOnly**: If true, only return unread notifications
    - **limit**: Maximum number of notifications to return (default 50)
    """
    service = NotificationService(db)
    notifications = service.get_user_notifications(
        user_id=user.id,
        unread_only=unread_only,
        limit=min(max(limit, 1), 200),
    )

    unread_count = service.get_unread_count(user.id)

    return schemas.NotificationListResponse(
        notifications=notifications,
        unread_count=unread_count,
        total_count=len(notifications),
    )


@router.post("/read-all", response_model=schemas.MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    updated = NotificationService(db).mark_all_read(user.id)
    return schemas.MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_read(
    notification_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    """
    Mark a specific notification as read.
    """
    service = NotificationService(db)
    success = service.mark_notification_read(notification_id, user.id)

    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
