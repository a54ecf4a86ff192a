from pydantic_settings import BaseSettings
from typing import Optional
import os


class Settings(BaseSettings):
    # Environment
    environment: str = "development"
    version: str = "1.0.0"

    # JSON storage
    data_dir: str = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data")
    uploads_dir: str = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "uploads")

    # JWT
    jwt_secret_key: str = "zeo-tourism-secret-key"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24

    # Admin account
    admin_email: str = "admin@zeotourism.com"
    admin_password: str = "admin123"
    admin_name: str = "Admin User"

    # CORS
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8501",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    cors_allow_all: bool = True

    # Uploads
    max_upload_mb: int = 50
    public_base_url: Optional[str] = None

    # Security
    max_login_attempts: int = 5
    lockout_duration_minutes: int = 5

    class Config:
        env_file = ".env"


settings = Settings()
