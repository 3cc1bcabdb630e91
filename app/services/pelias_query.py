"""
Pelias request construction.

Each GeocodeQuery variant knows its provider path, how to validate itself and
which query parameters it sends. Parameters are collected by name in a
QueryParams builder and encoded by httpx, never concatenated by hand.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from app.core.geo import is_valid_coordinate

AUTOCOMPLETE_MIN_SIZE = 1
AUTOCOMPLETE_MAX_SIZE = 100
AUTOCOMPLETE_DEFAULT_SIZE = 10


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    # str() of a float is its shortest round-tripping repr, so no rounding happens
    return str(value)


class QueryParams:
    """Query parameters keyed by name, in insertion order."""

    def __init__(self) -> None:
        self._params: dict[str, str] = {}

    def set(self, name: str, value: object) -> "QueryParams":
        if value is None:
            return self
        self._params[name] = _format_value(value)
        return self

    def set_list(self, name: str, values: Optional[Iterable[str]]) -> "QueryParams":
        """Comma-join non-blank entries; leave the parameter out if none remain."""
        if values is None:
            return self
        items = [v.strip() for v in values if v and v.strip()]
        if items:
            self._params[name] = ",".join(items)
        return self

    def set_point(self, prefix: str, point: Optional["GeoPoint"]) -> "QueryParams":
        if point is None:
            return self
        self.set(f"{prefix}.lat", point.lat)
        self.set(f"{prefix}.lon", point.lon)
        return self

    def as_dict(self) -> dict[str, str]:
        return dict(self._params)

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __getitem__(self, name: str) -> str:
        return self._params[name]


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float

    @classmethod
    def optional(cls, lat: Optional[float], lon: Optional[float]) -> Optional["GeoPoint"]:
        """A point only when both components are present."""
        if lat is None or lon is None:
            return None
        return cls(lat=lat, lon=lon)

    def is_valid(self) -> bool:
        return is_valid_coordinate(self.lat, self.lon)


@dataclass(frozen=True)
class ForwardQuery:
    text: str
    path = "search"

    def validate(self) -> Optional[str]:
        if not self.text or not self.text.strip():
            return "Address cannot be empty"
        return None

    def params(self) -> QueryParams:
        return QueryParams().set("text", self.text)


@dataclass(frozen=True)
class ReverseQuery:
    point: GeoPoint
    path = "reverse"

    def validate(self) -> Optional[str]:
        if not self.point.is_valid():
            return "Invalid coordinates provided"
        return None

    def params(self) -> QueryParams:
        return QueryParams().set_point("point", self.point)


@dataclass(frozen=True)
class SearchQuery:
    text: str
    focus: Optional[GeoPoint] = None
    path = "search"

    def validate(self) -> Optional[str]:
        if not self.text or not self.text.strip():
            return "Search query cannot be empty"
        if self.focus is not None and not self.focus.is_valid():
            return "Invalid focus coordinates provided"
        return None

    def params(self) -> QueryParams:
        return QueryParams().set("text", self.text).set_point("focus.point", self.focus)


@dataclass(frozen=True)
class AutocompleteQuery:
    text: str
    focus: Optional[GeoPoint] = None
    layers: tuple[str, ...] = field(default_factory=tuple)
    sources: tuple[str, ...] = field(default_factory=tuple)
    size: int = AUTOCOMPLETE_DEFAULT_SIZE
    path = "autocomplete"

    def validate(self) -> Optional[str]:
        if not self.text or not self.text.strip():
            return "Text cannot be empty"
        if not AUTOCOMPLETE_MIN_SIZE <= self.size <= AUTOCOMPLETE_MAX_SIZE:
            return f"Size must be between {AUTOCOMPLETE_MIN_SIZE} and {AUTOCOMPLETE_MAX_SIZE}"
        if self.focus is not None and not self.focus.is_valid():
            return "Invalid coordinates provided"
        return None

    def params(self) -> QueryParams:
        return (
            QueryParams()
            .set("text", self.text)
            .set("size", self.size)
            .set_point("focus.point", self.focus)
            .set_list("layers", self.layers)
            .set_list("sources", self.sources)
        )


GeocodeQuery = Union[ForwardQuery, ReverseQuery, SearchQuery, AutocompleteQuery]


def build_params(query: GeocodeQuery, api_key: Optional[str] = None) -> QueryParams:
    """Query parameters for a request, with api_key appended only when configured."""
    params = query.params()
    if api_key:
        params.set("api_key", api_key)
    return params
