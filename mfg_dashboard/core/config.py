import os
from dotenv import load_dotenv
from pydantic import BaseModel
from typing import List

load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "Manufacturing Dashboard")
    environment: str = os.getenv("ENVIRONMENT", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./mfg_dashboard.db")
    # Reference timezone used to decide what "today" is for milestone checks
    status_timezone: str = os.getenv("STATUS_TIMEZONE", "America/New_York")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: List[str] = _split_origins(os.getenv("CORS_ORIGINS", "http://localhost:3000"))
    seed_demo_data: bool = os.getenv("SEED_DEMO_DATA", "false").lower() in ("1", "true", "yes")

settings = Settings()
