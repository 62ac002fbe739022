# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, List
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./database_bakery.db"

    FRONTEND_URL: str = "http://localhost:5173"
    STORE_NAME: str = "Trigo Pan Expres"

    # Destination of the order notification (WhatsApp number, country code first)
    WHATSAPP_NUMBER: str = "573117643702"

    # Optional webhook receiving the order message server-side
    NOTIFY_WEBHOOK_URL: str = ""
    NOTIFY_TIMEOUT_SECONDS: float = 5.0

    # Idle carts are dropped from memory after this many minutes
    CART_SESSION_IDLE_MINUTES: int = 120

    # Authoritative catalog category identifiers
    PRODUCT_CATEGORIES: List[str] = ["pan", "pasteles", "pasteleria", "bebidas"]

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra = "ignore"

settings = Settings()
