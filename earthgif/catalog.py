"""NASA EPIC catalog client: list dates, list frames, fetch frame PNGs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final, Optional

import httpx

from .config import Settings
from .errors import DecodeError, NetworkError

logger = logging.getLogger(__name__)

JSON_HEADERS: Final[dict[str, str]] = {"content-type": "application/json"}
PNG_HEADERS: Final[dict[str, str]] = {"content-type": "image/png"}


@dataclass(frozen=True)
class FrameDescriptor:
    """One catalog entry: EPIC image name plus capture timestamp."""

    identifier: str
    timestamp: str  # "YYYY-MM-DD HH:MM:SS"

    @property
    def day(self) -> str:
        return self.timestamp.split(" ")[0]

    @property
    def archive_path(self) -> str:
        """``2022-01-01 00:10:00`` → ``2022/01/01``."""
        return self.day.replace("-", "/")


class CatalogClient:
    """Thin async wrapper around the three read-only EPIC endpoints.

    No retries and no fallbacks: transport errors and non-2xx responses
    raise :class:`NetworkError`, bad JSON raises :class:`DecodeError`.
    """

    def __init__(
        self, settings: Settings, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self.settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=settings.timeout, http2=True, follow_redirects=True
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── requests ──

    async def _get(self, operation: str, url: str, headers: dict[str, str]) -> httpx.Response:
        logger.debug("GET %s", url)
        try:
            r = await self._client.get(
                url, params={"api_key": self.settings.api_key}, headers=headers
            )
        except httpx.HTTPError as exc:
            raise NetworkError(operation, exc) from exc
        if not r.is_success:
            # Report the url without the query string, it carries the api key.
            raise NetworkError(operation, f"HTTP {r.status_code} {r.reason_phrase} for {url}")
        logger.debug("HTTP %s, %d bytes", r.status_code, len(r.content))
        return r

    async def _get_json(self, operation: str, url: str) -> list[dict[str, Any]]:
        r = await self._get(operation, url, JSON_HEADERS)
        try:
            body = r.json()
        except ValueError as exc:
            raise DecodeError(operation, exc) from exc
        if not isinstance(body, list) or not all(isinstance(e, dict) for e in body):
            raise DecodeError(operation, f"expected a JSON array of objects, got {body!r:.80}")
        return body

    # ── endpoints ──

    async def list_all_dates(self) -> list[str]:
        """Every date with imagery, as ``YYYY-MM-DD`` strings in catalog order."""
        op = "catalog.list_all_dates"
        entries = await self._get_json(op, f"{self.settings.api_base}/all")
        try:
            return [str(e["date"]).split(" ")[0] for e in entries]
        except KeyError as exc:
            raise DecodeError(op, f"entry missing {exc}") from exc

    async def list_frames(self, date: Optional[str] = None) -> list[FrameDescriptor]:
        """Frames for *date*; the most recent day when *date* is empty."""
        op = "catalog.list_frames"
        url = self.settings.api_base
        if date:
            url += f"/date/{date}"
        entries = await self._get_json(op, url)
        try:
            frames = [FrameDescriptor(str(e["image"]), str(e["date"])) for e in entries]
        except KeyError as exc:
            raise DecodeError(op, f"entry missing {exc}") from exc
        logger.debug("Catalog lists %d frames for %s", len(frames), date or "latest")
        return frames

    async def fetch_frame_bytes(self, identifier: str, archive_path: str) -> bytes:
        """Raw PNG for *identifier*; *archive_path* is ``YYYY/MM/DD``."""
        url = f"{self.settings.archive_base}/{archive_path}/png/{identifier}.png"
        r = await self._get("catalog.fetch_frame", url, PNG_HEADERS)
        return r.content

    async def fetch_frame(self, descriptor: FrameDescriptor) -> bytes:
        return await self.fetch_frame_bytes(descriptor.identifier, descriptor.archive_path)
