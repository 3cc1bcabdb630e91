from app.schemas.geo import (
    AutocompleteSuggestion,
    Coordinates,
    DistanceInfo,
    DistanceRequest,
    HealthStatus,
    LocationInfo,
)
from app.schemas.pelias import PeliasFeature, PeliasFeatureCollection, PeliasGeometry, PeliasProperties

__all__ = [
    "AutocompleteSuggestion",
    "Coordinates",
    "DistanceInfo",
    "DistanceRequest",
    "HealthStatus",
    "LocationInfo",
    "PeliasFeature",
    "PeliasFeatureCollection",
    "PeliasGeometry",
    "PeliasProperties",
]
