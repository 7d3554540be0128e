# selectorkit/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class MatchStrategy(str, Enum):
    """How `SelectorQuery.find` settles on a single node."""
    one = "one"
    first = "first"
    smart = "smart"
    prefer_exact = "prefer_exact"


class Settings(BaseSettings):
    """
    selectorkit configuration, read from the environment and an optional
    `.env` file (environment wins), falling back to the defaults below.
    """

    # ---- Query defaults ----
    EXACT: bool = Field(default=False, description="Default for the `exact` query option")
    EXACT_TEXT: bool = Field(default=False, description="String `text` option must equal the whole node text")
    MATCH: MatchStrategy = Field(default=MatchStrategy.smart, description="Default for the `match` query option")
    DEFAULT_SELECTOR: str = Field(default="css", description="Used when no selector is named or detected")

    # ---- Selector behaviour ----
    ENABLE_ARIA_LABEL: bool = Field(default=False, description="Fields also match on aria-label")
    STRICT_EXPRESSIONS: bool = Field(
        default=False,
        description="Calling a selector without an expression raises instead of warning",
    )

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.INFO)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./selectorkit.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("MATCH", "LOG_LEVEL", mode="before")
    @classmethod
    def _enum_names_any_case(cls, v: Any, info):
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "LOG_LEVEL" else v.lower()

    @field_validator("LOG_FILE", mode="after")
    @classmethod
    def _log_file_from_cwd(cls, v: Path):
        return v if v.is_absolute() else Path.cwd() / v

    @field_validator("DEFAULT_SELECTOR")
    @classmethod
    def _selector_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("DEFAULT_SELECTOR cannot be empty")
        return v

    def query_defaults(self) -> Dict[str, Any]:
        """Option values a query falls back to when the caller leaves them out."""
        return {"exact": self.EXACT, "match": self.MATCH.value}


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Settings are read once per process; `get_settings.cache_clear()` re-reads
    the environment.
    """
    return Settings()
