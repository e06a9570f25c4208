import os
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt

from gymcrm.core.logging_config import get_logger
from gymcrm.core.settings import is_production

logger = get_logger("auth.jwt")

SECRET_KEY_ACCESS_TOKEN = os.getenv("SECRET_KEY_ACCESS_TOKEN", "super-secret")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", 30))
TOKEN_COOKIE_NAME = "token"


def get_cookie_secure_setting():
    """Return secure cookie setting based on environment"""
    return is_production()


def get_cookie_samesite_setting():
    """Return samesite cookie setting based on environment"""
    return "strict" if is_production() else "lax"


def get_access_cookie_max_age_seconds() -> int:
    return ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60


def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    logger.debug(f"Access token expires at: {expire}")
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY_ACCESS_TOKEN, algorithm=ALGORITHM)


def verify_token(token: str):
    try:
        return jwt.decode(token, SECRET_KEY_ACCESS_TOKEN, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Error verifying access token: {e}")
        return None


def set_token_cookie(response, token: str) -> None:
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=get_cookie_secure_setting(),
        samesite=get_cookie_samesite_setting(),
        max_age=get_access_cookie_max_age_seconds(),
    )


def clear_token_cookie(response) -> None:
    response.delete_cookie(
        key=TOKEN_COOKIE_NAME,
        httponly=True,
        secure=get_cookie_secure_setting(),
        samesite=get_cookie_samesite_setting(),
    )
