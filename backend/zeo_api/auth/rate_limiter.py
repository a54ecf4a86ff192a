import time
import hashlib
from typing import Dict, Optional, Tuple
from datetime import datetime, timedelta
from collections import defaultdict
import threading

from zeo_api.core.config import settings


class RateLimiter:
    """Thread-safe login attempt limiter with lockout."""

    def __init__(self, login_attempts_limit: int, lockout_minutes: int):
        self._lock = threading.Lock()
        self._attempts: Dict[str, list] = defaultdict(list)
        self._lockouts: Dict[str, datetime] = {}

        self.login_attempts_limit = login_attempts_limit
        self.login_lockout_duration = timedelta(minutes=lockout_minutes)
        self.window_seconds = lockout_minutes * 60

    def _clean_old_attempts(self, key: str, window_seconds: int):
        """Remove attempts older than the window."""
        cutoff = time.time() - window_seconds
        self._attempts[key] = [attempt for attempt in self._attempts[key] if attempt > cutoff]

    def _get_key(self, identifier: str, action: str) -> str:
        return f"{action}:{hashlib.sha256(identifier.lower().encode()).hexdigest()[:16]}"

    def check_login_attempts(self, email: str) -> Tuple[bool, Optional[datetime]]:
        """Check if login attempts are within limits."""
        with self._lock:
            key = self._get_key(email, "login")

            if key in self._lockouts:
                lockout_until = self._lockouts[key]
                if datetime.now() < lockout_until:
                    return False, lockout_until
                # Lockout expired
                del self._lockouts[key]
                self._attempts[key] = []

            self._clean_old_attempts(key, self.window_seconds)

            if len(self._attempts[key]) < self.login_attempts_limit:
                return True, None

            lockout_until = datetime.now() + self.login_lockout_duration
            self._lockouts[key] = lockout_until
            return False, lockout_until

    def record_login_attempt(self, email: str, success: bool):
        with self._lock:
            key = self._get_key(email, "login")

            if success:
                self._attempts.pop(key, None)
                self._lockouts.pop(key, None)
            else:
                self._attempts[key].append(time.time())

    def reset(self):
        with self._lock:
            self._attempts.clear()
            self._lockouts.clear()


# Global rate limiter instance
rate_limiter = RateLimiter(
    login_attempts_limit=settings.max_login_attempts,
    lockout_minutes=settings.lockout_duration_minutes
)
