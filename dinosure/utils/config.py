from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    return v if v is not None and v != "" else default


@dataclass(frozen=True)
class Settings:
    log_level: str
    app_title: str


def get_settings() -> Settings:
    """
    Runtime settings via environment variables.

    Env:
      DINOSURE_LOG_LEVEL (default: INFO)
      DINOSURE_APP_TITLE (default: Dinosure Product Module)
    """
    return Settings(
        log_level=(_env("DINOSURE_LOG_LEVEL", "INFO") or "INFO").upper(),
        app_title=_env("DINOSURE_APP_TITLE", "Dinosure Product Module")
        or "Dinosure Product Module",
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("dinosure").setLevel(level)
