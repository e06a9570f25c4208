"""
Request dependencies: authentication, tenant resolution and the subscription gate
"""
from datetime import timedelta

from fastapi import Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.dates import ensure_aware, is_subscription_active, utcnow
from gymcrm.core.logging_config import get_logger, log_security_event
from gymcrm.crud.gymsCrud import get_gym
from gymcrm.crud.sessionCrud import get_active_session, touch_session
from gymcrm.crud.usersCrud import get_user_by_id
from gymcrm.db.postgresql import get_db
from gymcrm.models import Gym, User
from gymcrm.security.jwt import TOKEN_COOKIE_NAME, verify_token

logger = get_logger("auth.deps")

LAST_ACTIVE_RESOLUTION = timedelta(minutes=5)

# Provisioned directly in the database; self-registration cannot grant it
PLATFORM_ADMIN_ROLE = "admin"


class SubscriptionExpired(Exception):
    """Raised by the gate; rendered as ``{"redirectToSubscription": true}``"""


async def subscription_expired_handler(request: Request, exc: SubscriptionExpired):
    return JSONResponse(status_code=200, content={"redirectToSubscription": True})


def read_token(request: Request) -> str | None:
    token = request.cookies.get(TOKEN_COOKIE_NAME)
    if token:
        return token
    authorization = request.headers.get("Authorization") or ""
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User:
    token = read_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")

    payload = verify_token(token)
    if not payload or not payload.get("user_id"):
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    session_id = payload.get("session_id")
    if session_id:
        session_row = await get_active_session(db, str(session_id))
        if session_row is None:
            log_security_event("revoked_session", f"user {payload.get('user_id')} used a revoked session")
            raise HTTPException(status_code=401, detail="Session expired, please log in again")
        last_active = ensure_aware(session_row.last_active_at)
        if last_active is None or utcnow() - last_active > LAST_ACTIVE_RESOLUTION:
            await touch_session(db, str(session_id))

    user = await get_user_by_id(db, payload["user_id"])
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user = user
    request.state.session_id = session_id
    return user


async def get_optional_user(request: Request, db: AsyncSession = Depends(get_db)) -> User | None:
    if not read_token(request):
        return None
    try:
        return await get_current_user(request, db)
    except HTTPException:
        return None


async def require_gym(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Gym:
    if user.industry != "gym":
        raise HTTPException(status_code=403, detail="Access denied. Not a gym user.")
    if not user.gym_id:
        raise HTTPException(status_code=403, detail="No gym associated with this user")
    gym = await get_gym(db, user.gym_id)
    if gym is None:
        raise HTTPException(status_code=404, detail="Gym not found")
    return gym


async def check_subscription(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> User:
    if not user.gym_id:
        return user
    try:
        gym = await get_gym(db, user.gym_id)
    except SQLAlchemyError:
        logger.exception(f"Subscription lookup failed for gym {user.gym_id}")
        raise HTTPException(status_code=500, detail="Server error")

    if gym is None or not is_subscription_active(gym.subscription_end_date):
        logger.info(f"Subscription inactive for gym {user.gym_id}, redirecting user {user.id}")
        raise SubscriptionExpired()
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != PLATFORM_ADMIN_ROLE:
        log_security_event("admin_denied", f"user {user.id} with role {user.role}")
        raise HTTPException(status_code=403, detail="Access denied. Admin privileges required.")
    return user
