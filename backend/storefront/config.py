from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    # shared secret of the auth provider that signs access tokens
    SECRET_KEY: str = "change-this-secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    ADMIN_ROLE: str = "admin"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    SITE_URL: str = "https://yourdomain.com"
    RELATED_PRODUCTS_LIMIT: int = 4
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
