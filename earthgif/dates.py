"""Validation of the ``--date`` flag and picking a neighbor for empty days."""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from typing import Callable, Final, Iterable, Optional

from .catalog import CatalogClient
from .errors import ValidationError

logger = logging.getLogger(__name__)

DATE_FORMAT: Final[str] = "%Y-%m-%d"
FIRST_DAY: Final[dt.date] = dt.date(2015, 6, 13)  # first EPIC imagery


def parse_date(text: str, today: Optional[dt.date] = None) -> dt.date:
    """Parse ``YYYY-MM-DD``; the day must be after FIRST_DAY and no later than *today*."""
    today = today or dt.date.today()
    try:
        day = dt.datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationError("dates.parse_date", f"not a valid date: {text!r}") from exc
    if not FIRST_DAY < day <= today:
        raise ValidationError(
            "dates.parse_date", f"date is not between {FIRST_DAY} and {today}"
        )
    return day


def nearest_dates(
    available: Iterable[str], wanted: str
) -> tuple[Optional[str], Optional[str]]:
    """(closest newer, closest older) available dates around *wanted*.

    Returns ``(wanted, wanted)`` when *wanted* itself has imagery.
    """
    days = set(available)
    if wanted in days:
        return wanted, wanted
    newer = min((d for d in days if d > wanted), default=None)
    older = max((d for d in days if d < wanted), default=None)
    return newer, older


def prompt_choice(newer: str, older: str, ask: Callable[[str], str] = input) -> str:
    """Ask the operator to type 0 (newer) or 1 (older) until they do."""
    print(
        "There are no images on that date.\n"
        f"Choose between these 2 options: (0) {newer}, (1) {older}"
    )
    while True:
        try:
            choice = ask("Type 0 or 1: ").strip()
        except EOFError as exc:
            raise ValidationError("dates.prompt_choice", "no choice made") from exc
        if choice == "0":
            return newer
        if choice == "1":
            return older


async def resolve_date(
    client: CatalogClient,
    wanted: str,
    choose: Callable[[str, str], str] = prompt_choice,
) -> str:
    """Return *wanted* if the catalog has it, otherwise a neighbor day."""
    newer, older = nearest_dates(await client.list_all_dates(), wanted)
    if newer == wanted:
        return wanted
    if newer and older:
        return await asyncio.to_thread(choose, newer, older)
    fallback = newer or older
    if fallback is None:
        raise ValidationError("dates.resolve_date", "the catalog lists no dates")
    logger.info("No images on %s, using %s", wanted, fallback)
    return fallback
