"""Unsplash image search client - HTTP-based implementation"""

from typing import Optional
import httpx
import logging

from sitegen.core.config import settings
from sitegen.models.errors import ImageLookupError

logger = logging.getLogger(__name__)


def parameterize_image_url(base_url: str, width: int, height: int) -> str:
    """Attach explicit size and crop arguments to a base image URL"""
    url = httpx.URL(base_url).copy_merge_params({
        "w": width,
        "h": height,
        "fit": "crop",
        "auto": "format",
        "q": 80,
    })
    return str(url)


class ImageSearchClient:
    """
    Looks up one photo per query on the Unsplash search API.

    Returns the photo's base URL; callers parameterize it with width/height.
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.access_key = access_key if access_key is not None else settings.unsplash_access_key
        self.api_url = api_url or settings.unsplash_api_url
        self.timeout = timeout or settings.image_search_timeout
        if not self.access_key:
            logger.warning("UNSPLASH_ACCESS_KEY not set - placeholder images will be left untouched")
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        return bool(self.access_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search(self, query: str, orientation: str) -> str:
        """
        Search for a photo matching the query and orientation.

        Args:
            query: Space-separated keywords (e.g., "team people")
            orientation: "landscape" | "portrait" | "squarish"

        Returns:
            Base image URL (unsized)

        Raises:
            ImageLookupError: On network errors, non-200 responses or empty results
        """
        params = {
            "query": query,
            "per_page": 1,
            "orientation": orientation,
            "client_id": self.access_key,
        }
        client = await self._get_client()
        try:
            logger.info(f"[Images] Searching Unsplash | query: '{query}' | orientation: {orientation}")
            response = await client.get(self.api_url, params=params)
        except httpx.HTTPError as e:
            raise ImageLookupError(f"Unsplash request failed for '{query}': {e}") from e

        if response.status_code != 200:
            raise ImageLookupError(f"Unsplash API error {response.status_code} for '{query}'")

        try:
            results = response.json().get("results") or []
            for photo in results:
                urls = photo.get("urls") or {}
                base = urls.get("raw") or urls.get("regular")
                if base:
                    return base
        except (ValueError, AttributeError, TypeError) as e:
            raise ImageLookupError(f"Unsplash returned an unreadable body for '{query}': {e}") from e
        raise ImageLookupError(f"No Unsplash results for '{query}'")
