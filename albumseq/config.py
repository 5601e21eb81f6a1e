"""
Configuration management for albumseq
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    # Context file holding tracklists, media and constraints
    context_path: str = "context.json"

    # Proposals
    default_count: int = 15
    max_tracks: int = 10  # 10! = 3,628,800 orderings
    worker_count: int = 1

    class Config:
        env_prefix = "ALBUMSEQ_"
        env_file = ".env"
        extra = "ignore"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
