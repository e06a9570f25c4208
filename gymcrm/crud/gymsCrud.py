import secrets
import string
from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import apply_changes, commit_or_rollback, save
from gymcrm.models import Gym

_CODE_ALPHABET = string.ascii_uppercase + string.digits


async def get_gym(db: AsyncSession, gym_id: int) -> Gym | None:
    res = await db.execute(select(Gym).where(Gym.id == gym_id))
    return res.scalar_one_or_none()


async def get_gym_by_name(db: AsyncSession, name: str) -> Gym | None:
    res = await db.execute(select(Gym).where(Gym.name == name))
    return res.scalars().first()


async def get_gym_by_code(db: AsyncSession, gym_code: str) -> Gym | None:
    res = await db.execute(select(Gym).where(Gym.gym_code == gym_code))
    return res.scalar_one_or_none()


async def generate_gym_code(db: AsyncSession) -> str:
    """Random ``GYM`` + 6 characters code that no other gym uses yet."""
    while True:
        code = "GYM" + "".join(secrets.choice(_CODE_ALPHABET) for _ in range(6))
        if await get_gym_by_code(db, code) is None:
            return code


async def create_gym(
    db: AsyncSession,
    *,
    name: str,
    logo: Optional[str] = None,
    address: Optional[dict] = None,
    contact_info: Optional[dict] = None,
    operating_hours: Optional[dict] = None,
    commit: bool = True,
) -> Gym:
    gym = Gym(
        gym_code=await generate_gym_code(db),
        name=name.strip(),
        logo=logo,
        address=address or {},
        contact_info=contact_info or {},
        operating_hours=operating_hours or {},
    )
    return await save(db, gym, commit=commit)


async def update_gym(
    db: AsyncSession,
    gym: Gym,
    *,
    name: Optional[str] = None,
    address: Optional[dict] = None,
    contact_info: Optional[dict] = None,
    operating_hours: Optional[dict] = None,
    logo: Optional[str] = None,
) -> Gym:
    """Partial update; nested dicts are merged into what is stored."""
    changes = {}
    if name:
        changes["name"] = name.strip()
    if logo is not None:
        changes["logo"] = logo
    if address is not None:
        changes["address"] = {**(gym.address or {}), **address}
    if contact_info is not None:
        changes["contact_info"] = {**(gym.contact_info or {}), **contact_info}
    if operating_hours is not None:
        changes["operating_hours"] = {**(gym.operating_hours or {}), **operating_hours}
    apply_changes(gym, changes)
    await commit_or_rollback(db)
    await db.refresh(gym)
    return gym


async def activate_subscription(
    db: AsyncSession,
    gym_id: int,
    *,
    start: datetime,
    end: datetime,
    duration_label: str,
) -> None:
    await db.execute(
        update(Gym)
        .where(Gym.id == gym_id)
        .values(
            subscription_start_date=start,
            subscription_end_date=end,
            subscription_duration=duration_label,
        )
    )
    await commit_or_rollback(db)


async def take_invoice_number(db: AsyncSession, gym_id: int) -> int:
    """Return the gym's next invoice sequence and advance the counter (no commit)."""
    res = await db.execute(
        update(Gym)
        .where(Gym.id == gym_id)
        .values(invoice_counter=Gym.invoice_counter + 1)
        .returning(Gym.invoice_counter)
    )
    return int(res.scalar_one()) - 1
