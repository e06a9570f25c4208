import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from user_agents import parse

from gymcrm.api.auth.types import LoginInput, ProfileInput, RegisterInput, UserOut
from gymcrm.api.deps import get_current_user, read_token
from gymcrm.core.logging_config import get_logger, log_auth_event
from gymcrm.crud.common import commit_or_rollback
from gymcrm.crud.gymsCrud import create_gym
from gymcrm.crud.sessionCrud import create_session, revoke_session
from gymcrm.crud.usersCrud import create_user, get_user_by_email, update_user
from gymcrm.db.postgresql import get_db
from gymcrm.models import User
from gymcrm.security.hashing import verify_password
from gymcrm.security.jwt import clear_token_cookie, create_access_token, set_token_cookie, verify_token

logger = get_logger("auth.routes")

router = APIRouter(prefix="/auth", tags=["auth"])


def describe_device(user_agent: str | None) -> str:
    if not user_agent:
        return "Unknown device"
    ua = parse(user_agent)
    return f"{ua.device.family} - {ua.os.family} {ua.os.version_string}".strip()


async def start_session(db: AsyncSession, request: Request, response: Response, user: User) -> str:
    """Record a login session and hand the client a token bound to it."""
    user_agent = request.headers.get("user-agent")
    session_id = f"session-id{uuid.uuid4().hex}"
    await create_session(
        db,
        user_id=user.id,
        session_id=session_id,
        device_name=describe_device(user_agent),
        ip_address=request.client.host if request.client else None,
        user_agent=user_agent,
    )
    token = create_access_token({"user_id": str(user.id), "session_id": session_id})
    set_token_cookie(response, token)
    log_auth_event("login", email=user.email, session_id=session_id)
    return token


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(data: RegisterInput, request: Request, response: Response, db: AsyncSession = Depends(get_db)):
    if await get_user_by_email(db, data.email):
        log_auth_event("register", email=data.email, success=False)
        raise HTTPException(status_code=400, detail="User already exists")

    gym_id = None
    if data.industry == "gym":
        if not (data.gym_name or "").strip():
            raise HTTPException(status_code=400, detail="Gym name is required for gym industry users")
        gym = await create_gym(db, name=data.gym_name, commit=False)
        gym_id = gym.id

    user = await create_user(
        db,
        name=data.name,
        email=data.email,
        password=data.password,
        industry=data.industry,
        role=data.role or "owner",
        gym_id=gym_id,
        commit=False,
    )
    await commit_or_rollback(db)
    await db.refresh(user)
    logger.info(f"Registered user {user.id} industry={user.industry} gym={gym_id}")

    token = await start_session(db, request, response, user)
    return {"success": True, "token": token, "user": UserOut.model_validate(user).dump()}


@router.post("/login")
async def login(data: LoginInput, request: Request, response: Response, db: AsyncSession = Depends(get_db)):
    user = await get_user_by_email(db, data.email)
    if user is None or not verify_password(data.password, user.password_hash):
        log_auth_event("login", email=data.email, success=False)
        raise HTTPException(status_code=400, detail="Invalid credentials")

    token = await start_session(db, request, response, user)
    return {"success": True, "token": token, "user": UserOut.model_validate(user).dump()}


@router.post("/logout")
async def logout(request: Request, response: Response, db: AsyncSession = Depends(get_db)):
    token = read_token(request)
    payload = verify_token(token) if token else None
    if payload and payload.get("session_id"):
        await revoke_session(db, str(payload["session_id"]))
        log_auth_event("logout", session_id=str(payload["session_id"]))
    clear_token_cookie(response)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return {"success": True, "user": UserOut.model_validate(user).dump()}


@router.get("/profile")
async def get_profile(user: User = Depends(get_current_user)):
    return {"success": True, "user": UserOut.model_validate(user).dump()}


@router.put("/profile")
async def update_profile(
    data: ProfileInput,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v not in (None, "")}
    if "email" in changes:
        existing = await get_user_by_email(db, changes["email"])
        if existing is not None and existing.id != user.id:
            raise HTTPException(status_code=400, detail="Email already in use")
    if "industry" in changes and changes["industry"] != user.industry and user.gym_id:
        raise HTTPException(status_code=400, detail="Industry cannot be changed while a gym is attached")
    user = await update_user(db, user, **changes)
    return {"success": True, "user": UserOut.model_validate(user).dump()}
