"""End-to-end run: catalog → concurrent download → caption → GIF."""

from __future__ import annotations

import logging
import pathlib
from typing import Callable, Optional, Sequence

from .catalog import CatalogClient
from .compose import CaptionStyle, composite, decode_frame, load_font
from .config import Settings
from .dates import prompt_choice, resolve_date
from .encode import encode_animation
from .errors import FilesystemError, ValidationError
from .fetch import Frame, fetch_frames

logger = logging.getLogger(__name__)


def build_animation(
    frames: Sequence[Frame], settings: Settings, style: Optional[CaptionStyle] = None
) -> pathlib.Path:
    """Caption every frame in order and encode them into ``settings.output``."""
    if not frames:
        raise ValidationError("pipeline.build_animation", "no frames")
    style = style or CaptionStyle()
    font = load_font(style)

    composites = []
    for frame in frames:
        try:
            settings.frame_path.write_bytes(frame.data)
        except OSError as exc:
            raise FilesystemError("pipeline.build_animation", exc) from exc
        composites.append(composite(decode_frame(frame.data), frame.caption, style, font))

    return encode_animation(composites, settings.output, loop=settings.loop)


async def run(
    settings: Settings,
    date: Optional[str] = None,
    client: Optional[CatalogClient] = None,
    style: Optional[CaptionStyle] = None,
    choose: Callable[[str, str], str] = prompt_choice,
) -> pathlib.Path:
    """Fetch *date* (latest day when None) and write the GIF; return its path."""
    owned = client is None
    client = client or CatalogClient(settings)
    try:
        if date:
            date = await resolve_date(client, date, choose)
        descriptors = await client.list_frames(date)
        if not descriptors:
            raise ValidationError("pipeline.run", f"no frames listed for {date or 'latest'}")
        logger.info("Found %d frames", len(descriptors))

        logger.info("Retrieving all PNGs …")
        frames = await fetch_frames(client, descriptors, settings.concurrency)
        logger.info("Creating GIF …")
        return build_animation(frames, settings, style)
    finally:
        if owned:
            await client.aclose()
