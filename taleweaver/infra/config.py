"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Rules engine
    game_system: str = "dnd5e"  # "dnd5e" | "pbta"
    rules_seed: int | None = None

    # Logging
    log_level: str = "INFO"

    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_debug: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
