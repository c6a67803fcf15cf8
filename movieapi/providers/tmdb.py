"""
TMDB API client

Thin async wrapper around the TMDB v3 REST API. Every call is a live
request: no retries and no caching.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from movieapi.core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class TMDBClient:
    """TMDB API client"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.themoviedb.org/3",
        language: str = "en-US",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: TMDB v3 API key, sent as the ``api_key`` query parameter
            base_url: API root, e.g. https://api.themoviedb.org/3
            language: value of the ``language`` query parameter
            timeout: per-request timeout in seconds; None waits indefinitely
            transport: custom httpx transport (tests)
        """
        if not api_key:
            logger.warning("TMDB API key not found. Set TMDB_API_KEY environment variable.")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language

        # One pooled client per process, created on first use
        self._client: Optional[httpx.AsyncClient] = None
        self._client_lock = asyncio.Lock()
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        GET ``path`` with the API key and language attached.

        Raises:
            UpstreamUnavailableError: on a non-2xx status or transport failure
        """
        query: Dict[str, Any] = {"api_key": self.api_key, "language": self.language}
        if params:
            query.update({k: v for k, v in params.items() if v is not None})

        client = await self._get_client()
        try:
            response = await client.get(f"{self.base_url}/{path.lstrip('/')}", params=query)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            status_message = self._status_message(exc.response)
            logger.error(
                "TMDB HTTP error for %s: %s (status=%s)",
                path,
                status_message,
                exc.response.status_code,
            )
            raise UpstreamUnavailableError(
                error=status_message, upstream_status=exc.response.status_code
            ) from exc
        except httpx.RequestError as exc:
            logger.error("TMDB request error for %s: %r", path, exc)
            raise UpstreamUnavailableError(error=str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            # Body was not JSON
            logger.error("TMDB returned a non-JSON body for %s", path)
            raise UpstreamUnavailableError(error="Invalid response from TMDB") from exc

    async def get_popular(self, page: int = 1) -> Dict[str, Any]:
        return await self.get("/movie/popular", {"page": page})

    async def search_movies(self, query: str, page: int = 1) -> Dict[str, Any]:
        return await self.get("/search/movie", {"query": query, "page": page})

    async def get_movie(
        self, movie_id: int, append_to_response: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.get(
            f"/movie/{movie_id}", {"append_to_response": append_to_response}
        )

    async def get_genres(self) -> Dict[str, Any]:
        return await self.get("/genre/movie/list")

    async def aclose(self) -> None:
        """Close underlying HTTP client (call on application shutdown)."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazily create and return a shared AsyncClient."""
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                )
            return self._client

    @staticmethod
    def _status_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict) and body.get("status_message"):
            return str(body["status_message"])
        return f"HTTP {response.status_code}"
