from typing import Optional
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from zeo_api.auth.jwt_manager import jwt_manager

# Missing headers are reported by get_current_admin, not by HTTPBearer
security = HTTPBearer(auto_error=False)


class CurrentAdmin:
    """Context class to hold the authenticated admin."""
    def __init__(self, user_id: int, email: str, name: Optional[str] = None):
        self.user_id = user_id
        self.email = email
        self.name = name


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentAdmin:
    """Dependency to get the current authenticated admin."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Access token required")

    # Verify token
    payload = jwt_manager.verify_access_token(credentials.credentials)
    if not payload or not payload.get("isAdmin"):
        raise HTTPException(status_code=403, detail="Invalid or expired token")

    return CurrentAdmin(
        user_id=int(payload["sub"]),
        email=payload["email"],
        name=payload.get("name")
    )
