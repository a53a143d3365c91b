"""Application settings loaded from environment."""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    data_path: Path = _DATA_DIR / "uganda_electoral_data.json"
    data_url: Optional[str] = None

    geocoder_url: str = "https://nominatim.openstreetmap.org/search"
    geocoder_user_agent: str = "UgandaLocationSelector/1.0"
    geocoder_timeout: Optional[float] = None
    country: str = "Uganda"

    log_level: str = "INFO"

    model_config = {
        "env_prefix": "UG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
