"""Animated GIFs of a day of NASA EPIC Earth imagery."""

from .catalog import CatalogClient, FrameDescriptor
from .config import Settings
from .errors import EarthGifError
from .fetch import Frame, fetch_frames
from .pipeline import build_animation, run

__version__ = "1.0.0"

__all__ = [
    "CatalogClient",
    "EarthGifError",
    "Frame",
    "FrameDescriptor",
    "Settings",
    "build_animation",
    "fetch_frames",
    "run",
]
