"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Source store
    source_store_backend: str = "dynamodb"  # "dynamodb" | "memory"
    sources_table_name: str = "wordlist-sources"
    aws_region: str = "eu-west-2"

    # Authorization
    # Scope claim required for POST/PUT/DELETE
    write_scope: str = "https://wordlist.gaul.tech/write"

    # Logging
    log_level: str = "INFO"
    audit_log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
