# storyhub/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: str) -> list[str]:
    return [part.strip() for part in os.getenv(name, default).split(",") if part.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "StoryHub API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = _env_list(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000",
    )

    # Embedded store (Tortoise DSN); tables are created on startup when missing
    database_url: str = os.getenv("DATABASE_URL", "sqlite://data.db")
    generate_schemas: bool = _env_bool("GENERATE_SCHEMAS", "true")

    # Session tokens
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret")  # use a strong secret in production
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))  # 12h

    # Simulated checkout links
    checkout_base_url: str = os.getenv("CHECKOUT_BASE_URL", "https://checkout.simulated.local/checkout")

    # Default admin bootstrap (skipped when ADMIN_PASSWORD is unset)
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@local")
    admin_username: str = os.getenv("ADMIN_USERNAME", "admin")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")

    # Realtime: room used when an event omits roomId
    default_room: str = os.getenv("DEFAULT_ROOM", "public")


settings = Settings()  # Instantiate configuration
