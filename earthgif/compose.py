"""Caption overlay: draw a frame's timestamp near the bottom of the image."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from .errors import DecodeError, FontLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptionStyle:
    """Caption layout in pixels.

    The anchor sits at ``(W - offset_x, H - offset_y)``; the defaults were
    tuned for 2048×2048 EPIC frames and simply clip on small images.
    """

    font_path: Optional[str] = "Helvetica.ttf"  # None → Pillow's bundled font
    font_size: int = 100
    offset_x: int = 500
    offset_y: int = 80
    margin: int = 60
    line_spacing: float = 1.5
    fill: tuple[int, int, int] = (255, 255, 255)


def load_font(style: CaptionStyle) -> ImageFont.FreeTypeFont:
    try:
        if style.font_path is None:
            return ImageFont.load_default(size=style.font_size)
        return ImageFont.truetype(style.font_path, size=style.font_size)
    except OSError as exc:
        raise FontLoadError("compose.load_font", f"{style.font_path}: {exc}") from exc


def decode_frame(data: bytes) -> Image.Image:
    """Raw PNG bytes → RGB image."""
    try:
        with Image.open(io.BytesIO(data)) as im:
            return im.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeError("compose.decode_frame", exc) from exc


def wrap_text(
    draw: ImageDraw.ImageDraw, text: str, font: ImageFont.FreeTypeFont, max_width: float
) -> list[str]:
    """Greedy word wrap; a word that doesn't fit still gets its own line."""
    lines: list[str] = []
    line = ""
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if line and draw.textlength(candidate, font=font) > max_width:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines


def composite(
    background: Image.Image,
    caption: str,
    style: CaptionStyle = CaptionStyle(),
    font: Optional[ImageFont.FreeTypeFont] = None,
) -> Image.Image:
    """Return a new RGB image: *background* with *caption* drawn on top.

    Lines are centered on ``x = W - offset_x`` and the whole block is
    centered vertically on ``y = H - offset_y``.
    """
    font = font or load_font(style)
    width, height = background.size

    canvas = Image.new("RGB", (width, height))
    canvas.paste(background.convert("RGB"), (0, 0))
    draw = ImageDraw.Draw(canvas)

    ascent, descent = font.getmetrics()
    font_height = ascent + descent
    pitch = font_height * style.line_spacing

    lines = wrap_text(draw, caption, font, width - style.margin)
    block_height = len(lines) * pitch - (style.line_spacing - 1) * font_height

    x = width - style.offset_x
    y = height - style.offset_y - block_height / 2
    for line in lines:
        draw.text((x, y), line, font=font, fill=style.fill, anchor="ma")
        y += pitch

    logger.debug("captioned %dx%d frame with %r (%d lines)", width, height, caption, len(lines))
    return canvas
