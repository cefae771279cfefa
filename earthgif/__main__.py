#!/usr/bin/env python3
"""
earthgif: NASA EPIC day-in-a-GIF
Fetch one day of EPIC Earth frames, stamp each with its capture time,
bake them into an animated GIF and serve it on http://localhost:8080/gif.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import pathlib

from .compose import CaptionStyle
from .config import (
    CONCURRENCY_DEFAULT,
    FRAME_PATH_DEFAULT,
    HOST_DEFAULT,
    OUTPUT_DEFAULT,
    PORT_DEFAULT,
    Settings,
)
from .dates import FIRST_DAY, parse_date
from .errors import EarthGifError
from .pipeline import run
from .server import serve


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="earthgif",
        description="Build an animated GIF from one day of NASA EPIC imagery.",
    )
    p.add_argument(
        "--date",
        default="",
        help=f"Day to animate, e.g. --date=2022-01-01 (after {FIRST_DAY}; default: latest)",
    )
    p.add_argument(
        "-o",
        "--output",
        type=pathlib.Path,
        default=pathlib.Path(OUTPUT_DEFAULT),
        help="Output GIF filename",
    )
    p.add_argument(
        "--frame-path",
        type=pathlib.Path,
        default=pathlib.Path(FRAME_PATH_DEFAULT),
        help="Where the most recently processed raw frame is kept",
    )
    p.add_argument(
        "--font",
        default=CaptionStyle.font_path,
        help="TrueType font used for captions (empty: Pillow's bundled font)",
    )
    p.add_argument(
        "--concurrency",
        type=int,
        default=CONCURRENCY_DEFAULT,
        help="Max simultaneous downloads",
    )
    p.add_argument(
        "--loop",
        type=int,
        default=None,
        help="GIF loop count (0 = forever; default: number of frames)",
    )
    p.add_argument("--host", default=HOST_DEFAULT, help="Address to serve the GIF on")
    p.add_argument("--port", type=int, default=PORT_DEFAULT, help="Port to serve the GIF on")
    p.add_argument(
        "--no-serve",
        action="store_true",
        help="Exit after writing the GIF instead of starting the server",
    )
    p.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable verbose DEBUG logging",
    )
    return p


def cli(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        settings = Settings.from_env(
            output=args.output,
            frame_path=args.frame_path,
            concurrency=args.concurrency,
            loop=args.loop,
            host=args.host,
            port=args.port,
        )
        date = parse_date(args.date).isoformat() if args.date else None

        # ── 1. Catalog + download + GIF ──
        gif_path = asyncio.run(run(settings, date, style=CaptionStyle(font_path=args.font or None)))
    except EarthGifError as exc:
        raise SystemExit(f"error: {exc}") from exc
    logging.info("GIF created → %s", gif_path.resolve())

    # ── 2. Serve ──
    if not args.no_serve:
        serve(settings)


if __name__ == "__main__":
    cli()
