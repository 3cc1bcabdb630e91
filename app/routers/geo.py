"""Geo service endpoints: Pelias proxy (location, geocode, search, autocomplete), distance and health."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from app.core.errors import ErrorKind, GeoError
from app.core.geo import haversine_distance_km, is_valid_coordinate, km_to_miles
from app.schemas.geo import (
    AutocompleteSuggestion,
    Coordinates,
    DistanceInfo,
    DistanceRequest,
    HealthStatus,
    LocationInfo,
)
from app.services.geo_projection import (
    first_coordinates,
    first_location,
    project_locations,
    project_suggestions,
)
from app.services.pelias_client import PeliasClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/geo", tags=["geo"])

# Autocomplete size accepted from API callers (the client itself allows up to 100)
AUTOCOMPLETE_SIZE_MIN, AUTOCOMPLETE_SIZE_MAX = 1, 20


def get_pelias_client(request: Request) -> PeliasClient:
    """Shared PeliasClient created in the app lifespan."""
    return request.app.state.pelias_client


def _split_csv(value: str | None) -> list[str] | None:
    """Split a comma-separated filter into trimmed, non-empty entries."""
    if not value:
        return None
    items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def _raise_for_error(error: GeoError, operation: str) -> None:
    """Translate a client error into an HTTPException, logging provider failures with their cause."""
    if error.is_provider_failure:
        logger.error(
            f"Pelias {operation} failed: kind={error.kind.value}, message={error.message}",
            exc_info=error.cause,
        )
        if error.kind == ErrorKind.TIMEOUT:
            message = f"Geocoding provider timed out while processing {operation} request"
        else:
            message = f"Internal server error while processing {operation} request"
        raise HTTPException(
            status_code=error.status_code,
            detail={"error": error.kind.value, "message": message},
        )

    logger.warning(f"Pelias {operation} {error.kind.value}: {error.message}")
    raise HTTPException(status_code=error.status_code, detail=error.message)


def _raise_not_found(message: str, operation: str) -> None:
    """Zero results for a single-result lookup."""
    _raise_for_error(GeoError(ErrorKind.NOT_FOUND, message), operation)


@router.get("/location", response_model=LocationInfo)
async def get_location(
    latitude: float = Query(..., description="Latitude (-90 to 90)"),
    longitude: float = Query(..., description="Longitude (-180 to 180)"),
    client: PeliasClient = Depends(get_pelias_client),
) -> LocationInfo:
    """
    Get location information for a coordinate pair (reverse geocoding).

    Returns the best-matching address, or 404 when Pelias has nothing at that point.
    """
    logger.info(f"Getting location for coordinates: {latitude}, {longitude}")

    result = await client.reverse_geocode(latitude, longitude)
    if not result.ok:
        _raise_for_error(result.error, "location")

    location = first_location(result.value)
    if location is None:
        _raise_not_found("No location information found for the provided coordinates", "location")
    return location


@router.get("/geocode", response_model=Coordinates)
async def geocode_address(
    address: str = Query("", description="Address to geocode"),
    client: PeliasClient = Depends(get_pelias_client),
) -> Coordinates:
    """Get coordinates for an address. The address label falls back to the input when Pelias omits it."""
    logger.info(f"Geocoding address: {address}")

    result = await client.geocode(address)
    if not result.ok:
        _raise_for_error(result.error, "geocoding")

    coordinates = first_coordinates(result.value, fallback_label=address)
    if coordinates is None:
        _raise_not_found("No coordinates found for the provided address", "geocoding")
    return coordinates


@router.get("/autocomplete", response_model=list[AutocompleteSuggestion])
async def autocomplete(
    text: str = Query("", description="Partial text for autocomplete"),
    focus_lat: float | None = Query(None, alias="focusLat", description="Optional focus latitude"),
    focus_lon: float | None = Query(None, alias="focusLon", description="Optional focus longitude"),
    layers: str | None = Query(None, description="Comma-separated layers (address,venue,locality)"),
    sources: str | None = Query(None, description="Comma-separated sources (osm,geonames)"),
    size: int = Query(10, description="Maximum number of results (1-20)"),
    client: PeliasClient = Depends(get_pelias_client),
) -> list[AutocompleteSuggestion]:
    """
    Get autocomplete suggestions for partial input.

    Example curl:
    ```bash
    curl "http://localhost:8000/api/v1/geo/autocomplete?text=pike+pl&focusLat=47.61&focusLon=-122.33&layers=venue,address"
    ```

    No matches is not an error: the response is an empty list, never 404.
    """
    logger.info(f"Getting autocomplete suggestions for text: {text}")

    if not AUTOCOMPLETE_SIZE_MIN <= size <= AUTOCOMPLETE_SIZE_MAX:
        raise HTTPException(
            status_code=400,
            detail=f"Size must be between {AUTOCOMPLETE_SIZE_MIN} and {AUTOCOMPLETE_SIZE_MAX}",
        )

    result = await client.autocomplete(
        text,
        focus_lat=focus_lat,
        focus_lon=focus_lon,
        layers=_split_csv(layers),
        sources=_split_csv(sources),
        size=size,
    )
    if not result.ok:
        _raise_for_error(result.error, "autocomplete")

    return project_suggestions(result.value)


@router.get("/search", response_model=list[LocationInfo])
async def search_places(
    query: str = Query("", description="Search query"),
    focus_lat: float | None = Query(None, alias="focusLat", description="Optional focus latitude"),
    focus_lon: float | None = Query(None, alias="focusLon", description="Optional focus longitude"),
    client: PeliasClient = Depends(get_pelias_client),
) -> list[LocationInfo]:
    """Search for places. Results keep Pelias ranking; 404 when nothing matches."""
    logger.info(f"Searching places with query: {query}")

    result = await client.search(query, focus_lat=focus_lat, focus_lon=focus_lon)
    if not result.ok:
        _raise_for_error(result.error, "search")

    locations = project_locations(result.value, fallback_label=query)
    if not locations:
        _raise_not_found("No places found for the provided search query", "search")
    return locations


@router.post("/distance", response_model=DistanceInfo)
def calculate_distance(request: DistanceRequest) -> DistanceInfo:
    """Great-circle distance between two points, in kilometers and miles."""
    logger.info("Calculating distance between two points")

    origin, destination = request.origin, request.destination
    if origin is None or destination is None:
        raise HTTPException(status_code=400, detail="Origin and destination coordinates are required")
    for point in (origin, destination):
        if not is_valid_coordinate(point.latitude, point.longitude):
            raise HTTPException(status_code=400, detail="Invalid coordinates provided")

    distance_km = haversine_distance_km(
        origin.latitude, origin.longitude,
        destination.latitude, destination.longitude,
    )
    return DistanceInfo(
        origin=origin,
        destination=destination,
        distance_km=distance_km,
        distance_miles=km_to_miles(distance_km),
    )


@router.get("/health", response_model=HealthStatus)
def health_check() -> HealthStatus:
    """Health check endpoint."""
    return HealthStatus(status="Healthy", timestamp=datetime.now(timezone.utc))
