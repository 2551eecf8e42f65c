"""Pexels display image client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_PEXELS_BASE_URL = "https://api.pexels.com/v1"
DEFAULT_FALLBACK_IMAGE_URL = (
    "https://images.pexels.com/photos/2245436/pexels-photo-2245436.png"
    "?auto=compress&cs=tinysrgb&h=650&w=940"
)

_logger = logging.getLogger(__name__)


class ImageClient(Protocol):
    """Interface for decorative image lookups."""

    async def fetch_display_image(self) -> str:
        """Return an image URL; never raises."""


@dataclass
class HttpxPexelsImageClient(ImageClient):
    """HTTPX-backed Pexels client that falls back to a fixed image."""

    api_key: str | None
    base_url: str
    fallback_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 5.0
    query: str = "travel"

    @classmethod
    def create(
        cls,
        api_key: str | None,
        base_url: str = DEFAULT_PEXELS_BASE_URL,
        fallback_url: str = DEFAULT_FALLBACK_IMAGE_URL,
        timeout_seconds: float = 5.0,
    ) -> "HttpxPexelsImageClient":
        """Create a Pexels client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            fallback_url=fallback_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_display_image(self) -> str:
        """Return the first travel photo, or the fallback on any failure."""
        if not self.api_key:
            return self.fallback_url
        try:
            response = await self.http_client.get(
                f"{self.base_url}/search",
                params={"query": self.query, "per_page": 1},
                headers={"Authorization": self.api_key},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            _logger.warning("Pexels image lookup failed: %s", exc)
            return self.fallback_url

        url = _first_large_photo(payload)
        if url is None:
            _logger.warning("Pexels image lookup returned no usable photos")
            return self.fallback_url
        return url

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _first_large_photo(payload: object) -> str | None:
    if not isinstance(payload, dict):
        return None
    photos = payload.get("photos")
    if not isinstance(photos, list) or not photos:
        return None
    first = photos[0]
    src = first.get("src") if isinstance(first, dict) else None
    url = src.get("large") if isinstance(src, dict) else None
    if isinstance(url, str) and url:
        return url
    return None
