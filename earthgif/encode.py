"""Palettize captioned frames and write the looping GIF."""

from __future__ import annotations

import logging
import os
import pathlib
import tempfile
from typing import Final, Optional, Sequence

from PIL import GifImagePlugin, Image

from .config import DELAY_CS
from .errors import FilesystemError, ValidationError

logger = logging.getLogger(__name__)


def _plan9_palette() -> list[tuple[int, int, int]]:
    """The 256-entry Plan 9 rgbv colormap (4 levels each of r, g, b and value)."""
    colors: list[tuple[int, int, int]] = [(0, 0, 0)] * 256
    i = 0
    for r in range(4):
        for v in range(4):
            j = v - r
            for g in range(4):
                for b in range(4):
                    den = max(r, g, b)
                    if den == 0:
                        c = (v * 17,) * 3
                    else:
                        num = 17 * (4 * den + v)
                        c = (r * num // den, g * num // den, b * num // den)
                    colors[i + (j & 15)] = c
                    j += 1
            i += 16
    return colors


PLAN9_PALETTE: Final[list[tuple[int, int, int]]] = _plan9_palette()


def _palette_image() -> Image.Image:
    im = Image.new("P", (1, 1))
    im.putpalette([channel for color in PLAN9_PALETTE for channel in color])
    return im


_PALETTE_IMAGE: Final[Image.Image] = _palette_image()


def quantize(image: Image.Image) -> Image.Image:
    """Map *image* onto the fixed palette with Floyd–Steinberg dithering."""
    return image.convert("RGB").quantize(
        palette=_PALETTE_IMAGE, dither=Image.Dither.FLOYDSTEINBERG
    )


def _write_gif(fh, frames: Sequence[Image.Image], duration_ms: int, loop: int) -> None:
    """One image block per frame, all sharing the global Plan 9 color table.

    ``save_all=True`` folds a frame identical to its predecessor into a
    longer delay; writing the blocks directly keeps every frame.
    """
    header, _ = GifImagePlugin.getheader(
        frames[0], info={"loop": loop, "duration": duration_ms, "optimize": False}
    )
    fh.write(b"".join(header))
    for frame in frames:
        for chunk in GifImagePlugin.getdata(frame, duration=duration_ms):
            fh.write(chunk)
    fh.write(b";")  # trailer


def encode_animation(
    frames: Sequence[Image.Image],
    path: pathlib.Path,
    delay_cs: int = DELAY_CS,
    loop: Optional[int] = None,
) -> pathlib.Path:
    """Write *frames* (in order) to *path* as one animated GIF.

    Every frame is shown for *delay_cs* centiseconds. ``loop=None`` sets the
    loop count to the number of frames; ``loop=0`` loops forever. The file
    is written next to *path* and renamed over it, so a reader sees either
    the previous GIF or the complete new one.
    """
    if not frames:
        raise ValidationError("encode.encode_animation", "no frames to encode")
    path = pathlib.Path(path)
    loop = len(frames) if loop is None else loop

    logger.info("Assembling GIF (%d frames) …", len(frames))
    palettized = [quantize(f) for f in frames]

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as exc:
        raise FilesystemError("encode.encode_animation", exc) from exc
    tmp = pathlib.Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            _write_gif(fh, palettized, delay_cs * 10, loop)
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise FilesystemError("encode.encode_animation", exc) from exc
    logger.debug("GIF writing complete: %s", path)
    return path
