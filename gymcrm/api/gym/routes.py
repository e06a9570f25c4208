import math

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import require_gym
from gymcrm.api.gym.types import GymOut, GymRegisterInput, GymUpdateInput, SubscriptionStatusOut
from gymcrm.core.dates import ensure_aware, is_subscription_active, utcnow
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.gymsCrud import create_gym, get_gym_by_name, update_gym
from gymcrm.db.postgresql import get_db
from gymcrm.models import Gym
from gymcrm.services.image_service import ImageService
from gymcrm.services.qr_service import gym_checkin_url, render_png

logger = get_logger("gym.routes")

router = APIRouter(prefix="/gym", tags=["gym"])


def get_image_service() -> ImageService:
    return ImageService()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_gym(data: GymRegisterInput, db: AsyncSession = Depends(get_db)):
    if await get_gym_by_name(db, data.name.strip()):
        raise HTTPException(status_code=400, detail="Gym already exists")
    gym = await create_gym(
        db,
        name=data.name,
        address=data.address,
        contact_info=data.contact_info,
        operating_hours=data.operating_hours,
    )
    logger.info(f"Gym {gym.id} registered with code {gym.gym_code}")
    return {"success": True, "gym": GymOut.model_validate(gym).dump()}


@router.get("/info")
async def gym_info(gym: Gym = Depends(require_gym)):
    return {"success": True, "gym": GymOut.model_validate(gym).dump()}


@router.put("/info")
async def update_gym_info(
    data: GymUpdateInput,
    gym: Gym = Depends(require_gym),
    db: AsyncSession = Depends(get_db),
):
    gym = await update_gym(
        db,
        gym,
        name=data.name,
        address=data.address,
        contact_info=data.contact_info,
        operating_hours=data.operating_hours,
    )
    return {"success": True, "gym": GymOut.model_validate(gym).dump()}


@router.post("/logo")
async def upload_logo(
    logo: UploadFile = File(...),
    gym: Gym = Depends(require_gym),
    db: AsyncSession = Depends(get_db),
    images: ImageService = Depends(get_image_service),
):
    file_data = await logo.read()
    is_valid, error = images.validate_image(file_data, logo.filename or "")
    if not is_valid:
        raise HTTPException(status_code=400, detail=error)

    previous = gym.logo
    path = images.process_and_save_image(file_data, gym.id, logo.filename)
    gym = await update_gym(db, gym, logo=path)
    images.delete_old_logo(previous)
    return {"success": True, "logo": path, "gym": GymOut.model_validate(gym).dump()}


@router.get("/qr-code")
async def gym_qr_code(gym: Gym = Depends(require_gym)):
    return Response(content=render_png(gym_checkin_url(gym.gym_code)), media_type="image/png")


@router.get("/subscription-status")
async def subscription_status(gym: Gym = Depends(require_gym)):
    now = utcnow()
    end = ensure_aware(gym.subscription_end_date)
    active = is_subscription_active(end, now)
    days_remaining = max(0, math.ceil((end - now).total_seconds() / 86400)) if end else 0
    body = SubscriptionStatusOut(active=active, subscription_end_date=end, days_remaining=days_remaining)
    return {"success": True, **body.dump()}
