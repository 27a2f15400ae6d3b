"""App settings, read from Streamlit secrets.

Recognized keys (all optional)::

    BASE_URL = "https://my-draw.streamlit.app/"   # prefix for shared links
    DRAW_TIMEOUT = 30                             # seconds, for the whole batch
    LOG_LEVEL = "INFO"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    base_url: str = ""
    draw_timeout: Optional[float] = None
    log_level: str = "INFO"


def load_settings(secrets: Mapping) -> Settings:
    base_url = str(secrets.get("BASE_URL", "") or "")

    timeout = secrets.get("DRAW_TIMEOUT", None)
    if timeout in (None, ""):
        draw_timeout = None
    else:
        draw_timeout = float(timeout)
        if draw_timeout <= 0:
            raise ValueError(f"DRAW_TIMEOUT must be positive, got {timeout!r}")

    log_level = str(secrets.get("LOG_LEVEL", "INFO")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown LOG_LEVEL {log_level!r}")

    return Settings(base_url=base_url, draw_timeout=draw_timeout, log_level=log_level)
