"""Pydantic data models for the route risk pipeline."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Coordinate(BaseModel):
    """A WGS84 coordinate, compared by value."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def label(self) -> str:
        return f"Lat {self.lat:.5f}, Lon {self.lon:.5f}"


class LocationInput(BaseModel):
    """An endpoint as entered by the user: address text and/or a pinned map point.

    A pinned coordinate always wins over the address text.
    """

    model_config = ConfigDict(frozen=True)

    address: str | None = None
    pinned: Coordinate | None = None

    @model_validator(mode="after")
    def _require_location(self) -> LocationInput:
        if self.pinned is None and not (self.address or "").strip():
            raise ValueError("Provide an address or pin a point on the map")
        return self

    def pin(self, coordinate: Coordinate) -> LocationInput:
        return self.model_copy(update={"pinned": coordinate})

    def display_text(self) -> str:
        if self.pinned is not None:
            return self.pinned.label()
        return (self.address or "").strip()


class PathGeometry(BaseModel):
    """Route polyline returned by the routing provider."""

    model_config = ConfigDict(frozen=True)

    coordinates: list[Coordinate] = Field(..., min_length=1)
    distance_m: float | None = None
    duration_s: float | None = None


class CheckResult(BaseModel):
    """Outcome of a soft check.

    ``checked`` is False when the provider call failed and ``value`` holds the
    conservative default instead of a real observation.
    """

    model_config = ConfigDict(frozen=True)

    value: bool | float
    checked: bool = True


class Sample(BaseModel):
    """A point along the route with its water and rain findings.

    ``None`` means the corresponding check could not be completed.
    """

    index: int
    coordinate: Coordinate
    has_water: bool | None = None
    rain_mm: float | None = Field(default=None, ge=0)

    @property
    def water_checked(self) -> bool:
        return self.has_water is not None

    @property
    def rain_checked(self) -> bool:
        return self.rain_mm is not None


class RunState(str, Enum):
    IDLE = "idle"
    RESOLVING_LOCATIONS = "resolving_locations"
    FETCHING_ROUTE = "fetching_route"
    SAMPLING = "sampling"
    ERROR = "error"
    DONE = "done"

    @property
    def is_active(self) -> bool:
        return self not in (RunState.IDLE, RunState.ERROR, RunState.DONE)


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AssessmentResult(BaseModel):
    """Complete result of one pipeline run."""

    state: RunState
    status: str
    origin: Coordinate | None = None
    destination: Coordinate | None = None
    path: PathGeometry | None = None
    samples: list[Sample] = Field(default_factory=list)
    risk_level: RiskLevel | None = None
    any_water: bool = False
    max_rain_mm: float = 0.0
    unchecked_samples: int = 0
    error_code: str | None = None
    error: str | None = None


class AssessRequest(BaseModel):
    """Body of ``POST /assess``."""

    origin: LocationInput
    destination: LocationInput
