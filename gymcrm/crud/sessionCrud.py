from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.dates import utcnow
from gymcrm.crud.common import commit_or_rollback, save
from gymcrm.models import Session


async def create_session(
    db: AsyncSession,
    *,
    user_id: int,
    session_id: str,
    device_name: Optional[str] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Session:
    """Open a login session; the token carries ``session_id`` so logout can revoke it."""
    return await save(
        db,
        Session(
            user_id=user_id,
            session=session_id,
            device_name=device_name,
            ip_address=ip_address,
            user_agent=user_agent,
            last_active_at=utcnow(),
        ),
    )


async def get_active_session(db: AsyncSession, session_id: str) -> Optional[Session]:
    res = await db.execute(
        select(Session).where(Session.session == session_id, Session.revoked_at.is_(None))
    )
    return res.scalar_one_or_none()


async def _stamp(db: AsyncSession, session_id: str, **values) -> None:
    await db.execute(update(Session).where(Session.session == session_id).values(**values))
    await commit_or_rollback(db)


async def touch_session(db: AsyncSession, session_id: str) -> None:
    await _stamp(db, session_id, last_active_at=utcnow())


async def revoke_session(db: AsyncSession, session_id: str) -> None:
    await _stamp(db, session_id, revoked_at=utcnow())
