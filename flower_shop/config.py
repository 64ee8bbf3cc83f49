import os

from dotenv import load_dotenv

load_dotenv()


def _bool_env(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./flower_shop.db")

SECRET_KEY = os.getenv("SECRET_KEY", "3c1d9a7e5b2f4e8a6d0c9b7a5e3f1d2c4b6a8e0f9d7c5b3a1e2f4d6c8b0a9e7f")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "freshflower")
# Plain password is only used to derive a hash when ADMIN_PASSWORD_HASH is unset
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "").strip()
ADMIN_SESSION_COOKIE = "admin_session"

RABBITMQ_URL = os.getenv("RABBITMQ_URL", "").strip()
EVENTS_EXCHANGE = os.getenv("EVENTS_EXCHANGE", "flower_shop.events")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SEED_ON_STARTUP = _bool_env("SEED_ON_STARTUP", False)
