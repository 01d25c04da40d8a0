"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Dice
    random_seed: int | None = None  # fixed seed for reproducible sessions

    # Rules
    wound_overflow_cascade: bool = False  # spill full wound tiers into the next

    # Logging
    log_level: str = "INFO"

    # App
    app_debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
