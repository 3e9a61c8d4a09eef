import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    database_url: str = "sqlite:///todo.db"
    host: str = "0.0.0.0"
    port: int = 5000
    api_prefix: str = "/api"
    api_base_url: str = "/api"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings(env_file: str | None = None) -> Settings:
    """Reads settings from the environment, after loading a .env file if one exists."""
    load_dotenv(env_file, override=False)
    api_prefix = "/" + os.getenv("API_PREFIX", "/api").strip("/")
    if api_prefix == "/":
        api_prefix = ""
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///todo.db"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        api_prefix=api_prefix,
        api_base_url=os.getenv("API_BASE_URL", api_prefix).rstrip("/"),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
