from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BIATHLON_", extra="ignore")

    app_name: str = "Biathlon Targets"
    database_url: str = "sqlite:///./biathlon_targets.db"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None

    # CORS para el frontend
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Bloquear predicciones cuando la carrera ya ha empezado
    enforce_prediction_cutoff: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
