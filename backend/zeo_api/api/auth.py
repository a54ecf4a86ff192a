from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from typing import Optional
import logging
import secrets

from zeo_api.core.config import settings
from zeo_api.auth.jwt_manager import jwt_manager
from zeo_api.auth.rate_limiter import rate_limiter
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: dict


def admin_user() -> dict:
    return {
        "id": 1,
        "name": settings.admin_name,
        "email": settings.admin_email,
        "isAdmin": True
    }


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """Authenticate the admin and return an access token."""
    if not request.email or not request.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    can_attempt, lockout_until = rate_limiter.check_login_attempts(request.email)
    if not can_attempt:
        raise HTTPException(
            status_code=429,
            detail=f"Too many login attempts. Try again after {lockout_until}",
            headers={"Retry-After": str(settings.lockout_duration_minutes * 60)}
        )

    email_ok = secrets.compare_digest(request.email.lower(), settings.admin_email.lower())
    password_ok = secrets.compare_digest(request.password, settings.admin_password)
    if not (email_ok and password_ok):
        rate_limiter.record_login_attempt(request.email, False)
        logger.warning(f"Failed admin login for {request.email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    rate_limiter.record_login_attempt(request.email, True)
    user = admin_user()

    return LoginResponse(token=jwt_manager.create_access_token(user), user=user)


@router.get("/me")
async def get_current_user_info(current_admin: CurrentAdmin = Depends(get_current_admin)):
    """Get current admin information."""
    return {
        "id": current_admin.user_id,
        "email": current_admin.email,
        "name": current_admin.name,
        "isAdmin": True
    }
