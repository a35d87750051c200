from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Recursion guard for nested subschema processing
    MAX_SCHEMA_DEPTH: int = 64

    # Coercion
    MAX_ARRAY_INDEX: int = 10_000  # index keys at or above this are dropped

    # Options
    LABEL_DELIMITER: str = "/"
    SUBSCHEMA_KEYWORDS: list[str] = ["oneOf", "anyOf"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for structured JSON, False for colored console

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_ENFORCER_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
