from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import apply_changes, commit_or_rollback, save
from gymcrm.models import User
from gymcrm.security.hashing import hash_password


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    res = await db.execute(select(User).where(User.id == int(user_id)))
    return res.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email.strip().lower()))
    return res.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    industry: str,
    role: str = "owner",
    gym_id: Optional[int] = None,
    phone: Optional[str] = None,
    commit: bool = True,
) -> User:
    user = User(
        name=name.strip(),
        email=email.strip().lower(),
        password_hash=hash_password(password),
        industry=industry,
        role=role,
        gym_id=gym_id,
        phone=phone,
    )
    return await save(db, user, commit=commit)


async def update_user(db: AsyncSession, user: User, **changes) -> User:
    if "email" in changes and changes["email"]:
        changes["email"] = changes["email"].strip().lower()
    apply_changes(user, changes)
    await commit_or_rollback(db)
    await db.refresh(user)
    return user
