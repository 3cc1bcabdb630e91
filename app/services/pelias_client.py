"""Pelias geocoding API client.

One PeliasClient is created at startup and shared by all requests. Every
operation issues at most one outbound GET and returns a ClientResult instead
of raising for validation, transport, HTTP or parse failures.
"""

import asyncio
import logging
import re
from typing import Iterable, Optional

import httpx
from pydantic import ValidationError

from app.core.config import PeliasConfig
from app.core.errors import ClientResult, ErrorKind
from app.schemas.pelias import PeliasFeatureCollection
from app.services.pelias_query import (
    AUTOCOMPLETE_DEFAULT_SIZE,
    AutocompleteQuery,
    ForwardQuery,
    GeocodeQuery,
    GeoPoint,
    ReverseQuery,
    SearchQuery,
    build_params,
)

logger = logging.getLogger(__name__)

USER_AGENT = "GeoService/1.0"
BODY_PREVIEW_CHARS = 500

PeliasResult = ClientResult[PeliasFeatureCollection]


def _redact_api_key(url: str) -> str:
    """Remove API key from URL for safe logging."""
    return re.sub(r'api_key=[^&]+', 'api_key=REDACTED', str(url))


class PeliasHTTPError(Exception):
    """Non-2xx answer from Pelias. The message carries the redacted URL only."""

    def __init__(self, status_code: int, safe_url: str):
        super().__init__(f"Pelias HTTP {status_code} for url '{safe_url}'")
        self.status_code = status_code
        self.safe_url = safe_url


def _as_filter(values: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Layer/source filter as a tuple; a bare string is one entry, not its characters."""
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def build_http_client(config: PeliasConfig, **kwargs) -> httpx.AsyncClient:
    """Create the shared AsyncClient: base URL, timeout and User-Agent are fixed here."""
    return httpx.AsyncClient(
        base_url=config.base_url,
        timeout=config.timeout_seconds,
        headers={"User-Agent": USER_AGENT},
        **kwargs,
    )


class PeliasClient:
    """Async client for the Pelias search, reverse and autocomplete endpoints."""

    def __init__(self, config: PeliasConfig, http_client: Optional[httpx.AsyncClient] = None):
        self._config = config
        self._owns_http_client = http_client is None
        self._http = http_client if http_client is not None else build_http_client(config)

    @property
    def config(self) -> PeliasConfig:
        return self._config

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def geocode(self, address: str, timeout: Optional[float] = None) -> PeliasResult:
        """Forward geocode an address via /search."""
        return await self._execute(ForwardQuery(text=address), timeout)

    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
        timeout: Optional[float] = None,
    ) -> PeliasResult:
        """Reverse geocode a point via /reverse. Coordinates are sent verbatim."""
        return await self._execute(ReverseQuery(point=GeoPoint(lat=latitude, lon=longitude)), timeout)

    async def search(
        self,
        query: str,
        focus_lat: Optional[float] = None,
        focus_lon: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> PeliasResult:
        """
        Search for places via /search.

        The focus point is only sent when both focus_lat and focus_lon are given.
        """
        return await self._execute(
            SearchQuery(text=query, focus=GeoPoint.optional(focus_lat, focus_lon)),
            timeout,
        )

    async def autocomplete(
        self,
        text: str,
        focus_lat: Optional[float] = None,
        focus_lon: Optional[float] = None,
        layers: Optional[Iterable[str]] = None,
        sources: Optional[Iterable[str]] = None,
        size: int = AUTOCOMPLETE_DEFAULT_SIZE,
        timeout: Optional[float] = None,
    ) -> PeliasResult:
        """
        Get suggestions for partial input via /autocomplete.

        Args:
            text: Partial text typed by the user
            focus_lat, focus_lon: Optional point to bias ranking toward
            layers: Optional layer filter (address, venue, locality, ...)
            sources: Optional source filter (osm, geonames, ...)
            size: Maximum number of results, 1 to 100
        """
        query = AutocompleteQuery(
            text=text,
            focus=GeoPoint.optional(focus_lat, focus_lon),
            layers=_as_filter(layers),
            sources=_as_filter(sources),
            size=size,
        )
        return await self._execute(query, timeout)

    async def _execute(self, query: GeocodeQuery, timeout: Optional[float]) -> PeliasResult:
        invalid = query.validate()
        if invalid:
            logger.warning(f"Rejected {query.path} request before calling Pelias: {invalid}")
            return ClientResult.failure(ErrorKind.INVALID_INPUT, invalid)

        params = build_params(query, self._config.api_key).as_dict()
        full_url = httpx.URL(str(self._http.base_url.join(query.path)), params=params)
        safe_url = _redact_api_key(str(full_url))

        logger.info(f"Calling Pelias: {safe_url}")

        try:
            response = await asyncio.wait_for(
                self._http.get(query.path, params=params),
                timeout,
            )
            response.raise_for_status()
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            return ClientResult.failure(
                ErrorKind.TIMEOUT,
                f"Pelias request timed out: {safe_url}",
                cause=e,
            )
        except httpx.HTTPStatusError as e:
            body = e.response.text
            truncated_body = body[:BODY_PREVIEW_CHARS] if body else "(empty)"
            # httpx puts the full URL (api_key included) in its message, so it is not kept as the cause
            return ClientResult.failure(
                ErrorKind.PROVIDER_UNAVAILABLE,
                f"Pelias HTTP {e.response.status_code}: {truncated_body}",
                cause=PeliasHTTPError(e.response.status_code, safe_url),
            )
        except httpx.RequestError as e:
            return ClientResult.failure(
                ErrorKind.PROVIDER_UNAVAILABLE,
                f"Pelias request failed: {e}",
                cause=e,
            )

        logger.info(f"Pelias response: status={response.status_code}, bytes={len(response.content)}")

        try:
            collection = PeliasFeatureCollection.model_validate_json(response.content)
        except ValidationError as e:
            return ClientResult.failure(
                ErrorKind.PROVIDER_RESPONSE_INVALID,
                "Invalid response format from Pelias API",
                cause=e,
            )

        logger.info(f"Pelias {query.path} returned {len(collection.features)} features")
        return ClientResult.success(collection)
