import os
from dotenv import load_dotenv
from pydantic import BaseModel
from typing import List

# Load environment variables from .env file
load_dotenv()

def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]

class Settings(BaseModel):
    """Application settings."""
    APP_NAME: str = os.getenv("APP_NAME", "Campaign Tracker")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./campaigns.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Campaign status labels
    ENFORCE_CAMPAIGN_STATUS: bool = os.getenv("ENFORCE_CAMPAIGN_STATUS", "true").lower() == "true"
    CAMPAIGN_STATUSES: List[str] = _split(os.getenv("CAMPAIGN_STATUSES", "active,upcoming,completed"))

    # Dashboard talks to the in-process app unless a remote API is configured
    CAMPAIGNS_API_URL: str = os.getenv("CAMPAIGNS_API_URL", "")

    CORS_ORIGINS: List[str] = _split(os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000"))

settings = Settings()
