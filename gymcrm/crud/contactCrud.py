from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import save
from gymcrm.models import ContactMessage


async def create_message(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    message: str,
    phone: Optional[str] = None,
    subject: Optional[str] = None,
) -> ContactMessage:
    return await save(
        db, ContactMessage(name=name, email=email, message=message, phone=phone, subject=subject)
    )


async def list_messages(db: AsyncSession) -> List[ContactMessage]:
    res = await db.execute(
        select(ContactMessage).order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
    )
    return list(res.scalars().all())
