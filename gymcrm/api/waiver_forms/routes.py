from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import get_optional_user
from gymcrm.crud.gymsCrud import get_gym
from gymcrm.db.postgresql import get_db
from gymcrm.models import User
from gymcrm.services.waiver_service import build_waiver_pdf

router = APIRouter(prefix="/waiver-forms", tags=["waiver-forms"])


@router.get("/download")
async def download_waiver(
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    gym_name = None
    if user is not None and user.gym_id:
        gym = await get_gym(db, user.gym_id)
        gym_name = gym.name if gym else None
    pdf = await run_in_threadpool(build_waiver_pdf, gym_name)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=gym-waiver-form.pdf"},
    )
