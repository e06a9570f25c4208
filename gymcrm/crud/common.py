"""Helpers shared by the CRUD modules."""
from typing import Any, Sequence, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


async def commit_or_rollback(db: AsyncSession) -> None:
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise


async def save(db: AsyncSession, row: Any, *, commit: bool = True) -> Any:
    """Add ``row``; commit and refresh it, or only flush inside a larger unit of work."""
    db.add(row)
    if commit:
        await commit_or_rollback(db)
        await db.refresh(row)
    else:
        await db.flush()
    return row


def apply_changes(row: Any, changes: dict) -> Any:
    for field, value in changes.items():
        setattr(row, field, value)
    return row


async def paginate(db: AsyncSession, stmt: Select, *, page: int, limit: int) -> Tuple[Sequence[Any], int]:
    """Run ``stmt`` for one page and count every matching row."""
    total = await db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery()))
    res = await db.execute(stmt.limit(limit).offset((page - 1) * limit))
    return res.scalars().all(), int(total or 0)
