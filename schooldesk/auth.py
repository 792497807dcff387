import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from . import config
from .bilingual import UNAUTHORIZED
from .database import get_db

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


# ----------------------- Utility Functions -----------------------

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def token_for(user: dict) -> str:
    return create_access_token(
        {"sub": str(user["id"]), "email": user["email"], "role": user.get("role", "student")}
    )


# ----------------------- Auth Helpers -----------------------

def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=401, detail=UNAUTHORIZED, headers={"WWW-Authenticate": "Bearer"}
    )


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db=Depends(get_db)) -> dict:
    if not token:
        raise _unauthorized()
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        raise _unauthorized()
    user_id: Optional[str] = payload.get("sub")
    if not user_id:
        raise _unauthorized()

    try:
        rows = db.table("users").select("*").eq("id", user_id).limit(1).execute().data
        email = payload.get("email")
        if not rows and email:
            rows = db.table("users").select("*").eq("email", email).limit(1).execute().data
    except Exception:
        logger.exception("Failed to load session user")
        raise HTTPException(status_code=500, detail="সেশন যাচাই করতে ত্রুটি। Error verifying session.")

    if not rows or not rows[0].get("is_active", True):
        raise _unauthorized()
    return rows[0]
