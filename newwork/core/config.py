# newwork-server/newwork/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "NEWWORK Employee API"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    JWT_SECRET_KEY: str = "your-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    CORS_ORIGINS: List[str] = ["*"]

    SEED_DEMO_DATA: bool = True
    DEMO_PASSWORD: str = "password123"

    # Feedback polishing backend; best effort only
    POLISH_API_URL: str = "https://api-inference.huggingface.co/models/gpt2"
    POLISH_API_TOKEN: Optional[str] = None
    POLISH_TIMEOUT_SECONDS: float = 10.0
    POLISH_MAX_LENGTH: int = 200


settings = Settings()
