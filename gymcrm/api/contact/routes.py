from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.contact.types import ContactInput, ContactOut
from gymcrm.api.deps import require_admin
from gymcrm.api.types import dump_list
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.contactCrud import create_message, list_messages
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

logger = get_logger("contact.routes")

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def contact_create(data: ContactInput, db: AsyncSession = Depends(get_db)):
    message = await create_message(db, **data.model_dump())
    logger.info(f"Contact message {message.id} received from {message.email}")
    return {"success": True, "message": "Message received. We will get back to you soon."}


@router.get("")
async def contact_list(user: User = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return {"success": True, "messages": dump_list(ContactOut, await list_messages(db))}
