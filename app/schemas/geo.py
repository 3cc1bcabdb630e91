"""Schemas for the geo service API responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Coordinates(BaseModel):
    """A (latitude, longitude) point, optionally labelled with the matched address."""
    latitude: float
    longitude: float
    address: Optional[str] = None


class LocationInfo(BaseModel):
    """Flattened location returned by /location and /search."""
    latitude: float
    longitude: float
    address: str = ""
    city: str = ""
    country: str = ""
    postal_code: str = ""


class AutocompleteSuggestion(BaseModel):
    """One autocomplete suggestion, in provider order."""
    label: str
    latitude: float
    longitude: float
    layer: str = ""
    source: str = ""
    confidence: float = 0
    city: str = ""
    country: str = ""
    region: str = ""


class DistanceRequest(BaseModel):
    """
    Request body for POST /distance.

    Both points are optional here; the endpoint answers 400 when one is missing.
    """
    origin: Optional[Coordinates] = None
    destination: Optional[Coordinates] = None


class DistanceInfo(BaseModel):
    origin: Coordinates
    destination: Coordinates
    distance_km: float
    distance_miles: float


class HealthStatus(BaseModel):
    status: str = "Healthy"
    timestamp: datetime
