"""Runtime settings, passed explicitly into every component."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass
from typing import Final, Optional

from .errors import ConfigurationError

# ─────────────── CONSTANTS ───────────────
API_BASE: Final[str] = "https://api.nasa.gov/EPIC/api/natural"
ARCHIVE_BASE: Final[str] = "https://api.nasa.gov/EPIC/archive/natural"
API_KEY_ENV: Final[str] = "API_KEY"
CONCURRENCY_DEFAULT: Final[int] = 8
TIMEOUT_DEFAULT: Final[float] = 30.0
DELAY_CS: Final[int] = 50  # per-frame delay in the final GIF, centiseconds
OUTPUT_DEFAULT: Final[str] = "earth.gif"
FRAME_PATH_DEFAULT: Final[str] = "earth.png"
HOST_DEFAULT: Final[str] = "0.0.0.0"
PORT_DEFAULT: Final[int] = 8080
# ──────────────────────────────────────────


@dataclass(frozen=True)
class Settings:
    api_key: str
    api_base: str = API_BASE
    archive_base: str = ARCHIVE_BASE
    timeout: float = TIMEOUT_DEFAULT
    concurrency: int = CONCURRENCY_DEFAULT
    output: pathlib.Path = pathlib.Path(OUTPUT_DEFAULT)
    frame_path: pathlib.Path = pathlib.Path(FRAME_PATH_DEFAULT)
    host: str = HOST_DEFAULT
    port: int = PORT_DEFAULT
    # None keeps the historical "loop count == frame count"; 0 loops forever.
    loop: Optional[int] = None

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Build settings from the environment, then apply *overrides*.

        ``API_KEY`` is mandatory. ``EARTHGIF_API_BASE`` and
        ``EARTHGIF_ARCHIVE_BASE`` point the client at another server.
        """
        key = os.environ.get(API_KEY_ENV, "").strip()
        if not key:
            raise ConfigurationError("config.from_env", "There is no API_KEY.")
        values = {
            "api_key": key,
            "api_base": os.environ.get("EARTHGIF_API_BASE", API_BASE),
            "archive_base": os.environ.get("EARTHGIF_ARCHIVE_BASE", ARCHIVE_BASE),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        settings = cls(**values)
        if settings.concurrency < 1:
            raise ConfigurationError(
                "config.from_env", f"concurrency must be >= 1, got {settings.concurrency}"
            )
        return settings
