"""Schemas for Pelias API responses (GeoJSON feature collections)."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _PeliasModel(BaseModel):
    """Base for provider models: field names match case-insensitively, extras are ignored."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _lowercase_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k.lower() if isinstance(k, str) else k: v for k, v in data.items()}
        return data


class PeliasGeometry(_PeliasModel):
    """Point geometry. Pelias orders coordinates as [longitude, latitude]."""
    type: str = "Point"
    coordinates: list[float] = Field(..., min_length=2)

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


class PeliasProperties(_PeliasModel):
    label: Optional[str] = None
    name: Optional[str] = None
    locality: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    postalcode: Optional[str] = None
    layer: Optional[str] = None
    source: Optional[str] = None
    confidence: Optional[float] = None


class PeliasFeature(_PeliasModel):
    type: str = "Feature"
    geometry: PeliasGeometry
    properties: PeliasProperties = Field(default_factory=PeliasProperties)


class PeliasFeatureCollection(_PeliasModel):
    """Provider response envelope. Features keep provider order; the first is the best match."""
    type: str = "FeatureCollection"
    features: list[PeliasFeature] = []
    bbox: Optional[list[float]] = None
