import logging

from fastapi import APIRouter, Depends, HTTPException

from ..auth import get_current_user, get_password_hash, token_for, verify_password
from ..database import get_db
from ..schemas import LoginRequest, PublicUser, RegisterRequest, Token, User
from . import utcnow_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _public(user: dict) -> PublicUser:
    return PublicUser(
        id=str(user["id"]),
        name=user.get("name", ""),
        email=user["email"],
        role=user.get("role", "student"),
        avatar_url=user.get("avatar_url"),
    )


# ----------------------- Auth Endpoints -----------------------
@router.post("/register", response_model=PublicUser)
def register(req: RegisterRequest, db=Depends(get_db)):
    try:
        existing = db.table("users").select("id").eq("email", str(req.email)).limit(1).execute().data
        if existing:
            raise HTTPException(status_code=400, detail="Email already registered")
        now = utcnow_iso()
        user = User(
            name=req.name,
            email=req.email,
            password_hash=get_password_hash(req.password),
            role=req.role,
        )
        doc = {**user.model_dump(mode="json"), "created_at": now, "updated_at": now}
        rows = db.table("users").insert(doc).execute().data
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error registering user")
        raise HTTPException(status_code=500, detail="নিবন্ধন করতে ত্রুটি। Registration failed.")
    return _public(rows[0])


@router.post("/login", response_model=Token)
def login(payload: LoginRequest, db=Depends(get_db)):
    try:
        rows = db.table("users").select("*").eq("email", str(payload.email)).limit(1).execute().data
    except Exception:
        logger.exception("Error loading user for login")
        raise HTTPException(status_code=500, detail="লগইন করতে ত্রুটি। Login failed.")
    user = rows[0] if rows else None
    if not user:
        raise HTTPException(status_code=400, detail="Incorrect email or password")
    if not verify_password(payload.password, user.get("password_hash", "")):
        raise HTTPException(status_code=400, detail="Incorrect email or password")
    return Token(access_token=token_for(user))


@router.get("/me", response_model=PublicUser)
def me(user: dict = Depends(get_current_user)):
    return _public(user)
