"""
Notifications for a CRM user, plus broadcasts addressed to the user's gym.

A broadcast is a single row shared by the whole gym, so its read state lives
in ``notification_reads`` (one marker per user) instead of the ``read``
column used by personal notifications.
"""
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import and_, delete, exists, func, not_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.dates import utcnow
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.common import commit_or_rollback, paginate, save
from gymcrm.models import Notification, NotificationRead

logger = get_logger("crud.notifications")


def _visible_to(user_id: int, gym_id: Optional[int]):
    own = Notification.user_id == user_id
    if gym_id is None:
        return own
    return or_(own, and_(Notification.broadcast.is_(True), Notification.gym_id == gym_id))


def _live():
    return or_(Notification.expires_at.is_(None), Notification.expires_at > utcnow())


def _read_by(user_id: int):
    marker = exists().where(
        NotificationRead.notification_id == Notification.id, NotificationRead.user_id == user_id
    )
    return or_(
        and_(Notification.broadcast.is_(False), Notification.read.is_(True)),
        and_(Notification.broadcast.is_(True), marker),
    )


async def read_flags(db: AsyncSession, user_id: int, notifications: Sequence[Notification]) -> List[bool]:
    """Read state of each notification as seen by ``user_id``."""
    broadcast_ids = [n.id for n in notifications if n.broadcast]
    seen = set()
    if broadcast_ids:
        res = await db.execute(
            select(NotificationRead.notification_id).where(
                NotificationRead.user_id == user_id, NotificationRead.notification_id.in_(broadcast_ids)
            )
        )
        seen = set(res.scalars())
    return [n.id in seen if n.broadcast else n.read for n in notifications]


async def list_notifications(
    db: AsyncSession,
    *,
    user_id: int,
    gym_id: Optional[int],
    read: Optional[bool] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[Sequence[Notification], int]:
    stmt = select(Notification).where(_visible_to(user_id, gym_id), _live())
    if read is not None:
        stmt = stmt.where(_read_by(user_id) if read else not_(_read_by(user_id)))
    stmt = stmt.order_by(Notification.created_at.desc(), Notification.id.desc())
    return await paginate(db, stmt, page=page, limit=limit)


async def count_unread(db: AsyncSession, *, user_id: int, gym_id: Optional[int]) -> int:
    total = await db.scalar(
        select(func.count(Notification.id)).where(
            _visible_to(user_id, gym_id), _live(), not_(_read_by(user_id))
        )
    )
    return int(total or 0)


async def create_notification(
    db: AsyncSession,
    *,
    user_id: Optional[int],
    type: str,
    title: str,
    message: str,
    gym_id: Optional[int] = None,
    data: Optional[dict] = None,
    link: Optional[str] = None,
    broadcast: bool = False,
    expires_at=None,
    commit: bool = True,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        gym_id=gym_id,
        type=type,
        title=title,
        message=message,
        data=data or {},
        link=link,
        broadcast=broadcast,
        expires_at=expires_at,
    )
    notification = await save(db, notification, commit=commit)
    logger.info(f"Notification {type} created for user {user_id}")
    return notification


async def _mark_broadcasts_read(db: AsyncSession, user_id: int, notification_ids: Sequence[int]) -> int:
    if not notification_ids:
        return 0
    res = await db.execute(
        select(NotificationRead.notification_id).where(
            NotificationRead.user_id == user_id, NotificationRead.notification_id.in_(notification_ids)
        )
    )
    already = set(res.scalars())
    fresh = [nid for nid in notification_ids if nid not in already]
    db.add_all(NotificationRead(notification_id=nid, user_id=user_id) for nid in fresh)
    return len(fresh)


async def mark_read(db: AsyncSession, *, user_id: int, gym_id: Optional[int], notification_id: int) -> Notification | None:
    res = await db.execute(
        select(Notification).where(Notification.id == notification_id, _visible_to(user_id, gym_id))
    )
    notification = res.scalar_one_or_none()
    if notification is None:
        return None
    if notification.broadcast:
        await _mark_broadcasts_read(db, user_id, [notification.id])
    else:
        notification.read = True
    await commit_or_rollback(db)
    await db.refresh(notification)
    return notification


async def mark_all_read(db: AsyncSession, *, user_id: int, gym_id: Optional[int]) -> int:
    res = await db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.broadcast.is_(False), Notification.read.is_(False))
        .values(read=True)
        .execution_options(synchronize_session=False)
    )
    updated = res.rowcount
    broadcasts = await db.execute(
        select(Notification.id).where(
            _visible_to(user_id, gym_id), Notification.broadcast.is_(True), not_(_read_by(user_id))
        )
    )
    updated += await _mark_broadcasts_read(db, user_id, list(broadcasts.scalars()))
    await commit_or_rollback(db)
    return updated


async def delete_notification(db: AsyncSession, *, user_id: int, notification_id: int) -> bool:
    owned = await db.scalar(
        select(Notification.id).where(Notification.id == notification_id, Notification.user_id == user_id)
    )
    if owned is None:
        return False
    await db.execute(delete(NotificationRead).where(NotificationRead.notification_id == owned))
    await db.execute(delete(Notification).where(Notification.id == owned))
    await commit_or_rollback(db)
    return True
