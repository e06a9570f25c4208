from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import check_subscription
from gymcrm.api.notifications.types import NotificationCreate, NotificationOut
from gymcrm.api.types import pagination
from gymcrm.core.conversions import coerce_positive_int
from gymcrm.crud.notificationsCrud import (
    count_unread, create_notification, delete_notification, list_notifications, mark_all_read, mark_read,
    read_flags,
)
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _read_filter(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


@router.get("")
async def notifications_list(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    read: Optional[str] = None,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    page_n = coerce_positive_int(page, 1)
    limit_n = coerce_positive_int(limit, 20)
    rows, total = await list_notifications(
        db, user_id=user.id, gym_id=user.gym_id, read=_read_filter(read), page=page_n, limit=limit_n
    )
    return {
        "success": True,
        "notifications": [
            NotificationOut.from_notification(row, read).dump()
            for row, read in zip(rows, await read_flags(db, user.id, rows))
        ],
        "unreadCount": await count_unread(db, user_id=user.id, gym_id=user.gym_id),
        "pagination": pagination(total, page_n, limit_n),
    }


@router.put("/read-all")
async def notifications_read_all(
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    updated = await mark_all_read(db, user_id=user.id, gym_id=user.gym_id)
    return {"success": True, "updated": updated}


@router.put("/{notification_id}/read")
async def notifications_read(
    notification_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    notification = await mark_read(db, user_id=user.id, gym_id=user.gym_id, notification_id=notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True, "notification": NotificationOut.from_notification(notification, True).dump()}


@router.delete("/{notification_id}")
async def notifications_delete(
    notification_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_notification(db, user_id=user.id, notification_id=notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True, "message": "Notification deleted"}


@router.post("", status_code=status.HTTP_201_CREATED)
async def notifications_create(
    data: NotificationCreate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    notification = await create_notification(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        type="broadcast" if data.broadcast else data.type,
        title=data.title,
        message=data.message,
        data=data.data,
        link=data.link,
        broadcast=data.broadcast,
        expires_at=data.expires_at,
    )
    return {"success": True, "notification": NotificationOut.model_validate(notification).dump()}
