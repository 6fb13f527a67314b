# pagewait/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------- Enums ----------

class BrowserEngine(str, Enum):
    playwright = "playwright"
    selenium = "selenium"


class BrowserType(str, Enum):
    chromium = "chromium"
    firefox = "firefox"
    webkit = "webkit"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ---------- Settings ----------

class Settings(BaseSettings):
    """
    Central configuration for pagewait.

    Values load in this order of precedence:
      1) Environment variables
      2) .env file in the working directory
      3) Defaults below
    """

    # ---- Waiting ----
    DEFAULT_TIMEOUT_MS: int = Field(default=20000, gt=0, description="Timeout used when a wait gets none")
    POLLING_INTERVAL_MS: int = Field(default=200, gt=0, description="Sleep between two predicate checks")
    CHANGE_POLLING_INTERVAL_MS: int = Field(default=500, gt=0, description="Sampling interval for move/resize waits")

    # ---- Projection helpers ----
    MAX_WORKERS: int = Field(default=8, ge=1)

    # ---- Browser configuration ----
    BROWSER_ENGINE: BrowserEngine = Field(default=BrowserEngine.playwright)
    BROWSER_TYPE: BrowserType = Field(default=BrowserType.chromium, description="Browser launched by open_session")
    HEADLESS: bool = Field(default=True, description="Run the browser headless")
    PAGE_LOAD_TIMEOUT: int = Field(default=60000, ge=1000)

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.INFO)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./pagewait.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore unknown envs to keep things flexible
    )

    @field_validator("LOG_FILE", mode="before")
    @classmethod
    def _coerce_to_path(cls, v):
        if isinstance(v, Path):
            return v
        return Path(str(v)) if v is not None else v

    @field_validator("LOG_FILE", mode="after")
    @classmethod
    def _absolutize_log_file(cls, v: Path, info):
        return v if v.is_absolute() else Path.cwd() / v

    # Convenience: Playwright launch options dict
    def playwright_launch_kwargs(self) -> dict:
        return {"headless": self.HEADLESS}


# --------- Public accessor (memoized) ---------

@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache settings once per process.
    Call `get_settings.cache_clear()` if you need to reload after changing env.
    """
    return Settings()


# --------- Wait policy handed to each engine ---------

class WaitPolicy(BaseModel):
    """
    Timeout and polling defaults owned by one `WaitUntil` engine.

    Engines resolve omitted per-call values against their policy at call
    time, so assigning a new value here changes every later wait of the
    owning engine. Not synchronized: mutate it from the thread that runs
    the waits.
    """

    model_config = ConfigDict(validate_assignment=True)

    default_timeout_ms: int = Field(default=20000, gt=0)
    polling_interval_ms: int = Field(default=200, gt=0)
    change_interval_ms: int = Field(default=500, gt=0)

    @classmethod
    def from_settings(cls, s: Settings) -> "WaitPolicy":
        return cls(
            default_timeout_ms=s.DEFAULT_TIMEOUT_MS,
            polling_interval_ms=s.POLLING_INTERVAL_MS,
            change_interval_ms=s.CHANGE_POLLING_INTERVAL_MS,
        )
