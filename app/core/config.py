from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COMMON_WORDS_PATH = Path(__file__).resolve().parent.parent / "resources" / "common_words.txt"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Keyword Cipher Workbench"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Database (trial save/restore)
    database_url: str = "sqlite:///./cipher_workbench.db"

    # Dictionary used by the common-word scorer
    common_words_path: Path = DEFAULT_COMMON_WORDS_PATH

    # Input limits
    max_text_length: int = 100_000
    min_keyword_letters: int = 1
    max_keyword_letters: int = 12

    # Keyword sweeps
    max_trials: int = 10_100
    trial_eviction_batch: int = 100
    materialize_limit: int = 8
    max_sweep_permutations: int = 1_000_000

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
