import os
from typing import List
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SECRET_KEY = "default_secret"


class Settings(BaseModel):
    database_url: str = "sqlite:///./tasks.db"
    secret_key: str = DEFAULT_SECRET_KEY
    token_expire_hours: int = 24
    cookie_name: str = "token"
    cookie_secure: bool = True
    cookie_samesite: str = "none"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "*")

    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./tasks.db"),
        secret_key=os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY),
        token_expire_hours=int(os.getenv("TOKEN_EXPIRE_HOURS", "24")),
        cookie_name=os.getenv("COOKIE_NAME", "token"),
        cookie_secure=_env_bool("COOKIE_SECURE", True),
        cookie_samesite=os.getenv("COOKIE_SAMESITE", "none"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
