from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep all process configuration centralized here.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.words_file: Path = Path(
            os.getenv("WORDS_FILE", str(Path.cwd() / "french_words.json"))
        )
        self.progress_file: Path = Path(
            os.getenv("PROGRESS_FILE", str(Path.cwd() / "progress.json"))
        )
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
