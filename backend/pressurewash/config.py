from pathlib import Path
from typing import List, Literal

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# load .env before Settings() is created
load_dotenv()

BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    QUOTES_STORE: Literal["json", "memory"] = "json"
    QUOTES_DATA_PATH: Path = BACKEND_DIR / "data" / "quotes.json"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False


settings = Settings()
