"""Concurrent download of every frame listed for a day."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Sequence

from tqdm.asyncio import tqdm

from .catalog import CatalogClient, FrameDescriptor
from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """A descriptor together with the PNG bytes downloaded for it."""

    descriptor: FrameDescriptor
    data: bytes

    @property
    def caption(self) -> str:
        return self.descriptor.timestamp


async def fetch_frames(
    client: CatalogClient, descriptors: Sequence[FrameDescriptor], concurrency: int
) -> list[Frame]:
    """Download *descriptors* with at most *concurrency* requests in flight.

    The first failure cancels the remaining downloads and is re-raised;
    on success the frames come back in descriptor order, whatever order
    the downloads finished in.
    """
    if not descriptors:
        raise ValidationError("fetch.fetch_frames", "no frames to download")

    gate = asyncio.Semaphore(concurrency)
    results: list[bytes | None] = [None] * len(descriptors)

    with tqdm(total=len(descriptors), desc="Downloading", unit="frame") as bar:

        async def _fetch(i: int, d: FrameDescriptor) -> None:
            async with gate:
                results[i] = await client.fetch_frame(d)
            logger.debug("fetched %s (%d bytes)", d.identifier, len(results[i]))
            bar.update(1)

        try:
            async with asyncio.TaskGroup() as tg:
                for i, d in enumerate(descriptors):
                    tg.create_task(_fetch(i, d))
        except ExceptionGroup as group:
            raise group.exceptions[0] from None

    return [Frame(d, data) for d, data in zip(descriptors, results)]
