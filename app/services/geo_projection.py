"""
Project Pelias features into the service's response models.

Pure functions, no I/O. Pelias geometry is [longitude, latitude]; every
projection swaps it into latitude/longitude fields. Missing text properties
become "" and missing confidence becomes 0.
"""

from typing import Optional

from app.schemas.geo import AutocompleteSuggestion, Coordinates, LocationInfo
from app.schemas.pelias import PeliasFeature, PeliasFeatureCollection

UNKNOWN_ADDRESS = "Unknown Address"
UNKNOWN_LOCATION = "Unknown Location"


def project_location(feature: PeliasFeature, fallback_label: str = UNKNOWN_ADDRESS) -> LocationInfo:
    props = feature.properties
    return LocationInfo(
        latitude=feature.geometry.latitude,
        longitude=feature.geometry.longitude,
        address=props.label or fallback_label,
        city=props.locality or "",
        country=props.country or "",
        postal_code=props.postalcode or "",
    )


def project_coordinates(feature: PeliasFeature, fallback_label: str) -> Coordinates:
    return Coordinates(
        latitude=feature.geometry.latitude,
        longitude=feature.geometry.longitude,
        address=feature.properties.label or fallback_label,
    )


def project_suggestion(feature: PeliasFeature) -> AutocompleteSuggestion:
    props = feature.properties
    return AutocompleteSuggestion(
        label=props.label or UNKNOWN_LOCATION,
        latitude=feature.geometry.latitude,
        longitude=feature.geometry.longitude,
        layer=props.layer or "",
        source=props.source or "",
        confidence=props.confidence if props.confidence is not None else 0,
        city=props.locality or "",
        country=props.country or "",
        region=props.region or "",
    )


def first_location(
    collection: PeliasFeatureCollection,
    fallback_label: str = UNKNOWN_ADDRESS,
) -> Optional[LocationInfo]:
    """Best match as a LocationInfo, or None when the provider found nothing."""
    if not collection.features:
        return None
    return project_location(collection.features[0], fallback_label)


def first_coordinates(collection: PeliasFeatureCollection, fallback_label: str) -> Optional[Coordinates]:
    """Best match as Coordinates, or None when the provider found nothing."""
    if not collection.features:
        return None
    return project_coordinates(collection.features[0], fallback_label)


def project_locations(
    collection: PeliasFeatureCollection,
    fallback_label: str = UNKNOWN_ADDRESS,
) -> list[LocationInfo]:
    return [project_location(f, fallback_label) for f in collection.features]


def project_suggestions(collection: PeliasFeatureCollection) -> list[AutocompleteSuggestion]:
    return [project_suggestion(f) for f in collection.features]
