from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional
from zeo_api.core.config import settings


class JWTManager:
    """Issues and verifies the admin access tokens."""

    def __init__(self, secret_key: str, algorithm: str, access_token_ttl: timedelta):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_ttl = access_token_ttl

    def create_access_token(self, user: Dict[str, Any]) -> str:
        """Create a new access token for the admin user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user["id"]),
            "email": user["email"],
            "name": user.get("name"),
            "isAdmin": user.get("isAdmin", True),
            "iat": now,
            "exp": now + self.access_token_ttl,
            "type": "access"
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_access_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify and decode an access token."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        # Check token type
        if payload.get("type") != "access":
            return None

        return payload


# Global JWT manager instance
jwt_manager = JWTManager(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_ttl=timedelta(minutes=settings.jwt_access_token_expire_minutes)
)
