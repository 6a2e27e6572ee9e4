"""Waterlogging risk assessment for driving routes."""

__version__ = "0.1.0"

from .errors import AssessmentError, NoRouteFound, NotFound, ProviderError, RunCancelled
from .geometry import distance
from .models import (
    AssessmentResult,
    CheckResult,
    Coordinate,
    LocationInput,
    PathGeometry,
    RiskLevel,
    RunState,
    Sample,
)
from .pipeline import RouteAssessmentPipeline, create_pipeline
from .risk import classify
from .sampler import PathSampler

__all__ = [
    "AssessmentError",
    "AssessmentResult",
    "CheckResult",
    "Coordinate",
    "LocationInput",
    "NoRouteFound",
    "NotFound",
    "PathGeometry",
    "PathSampler",
    "ProviderError",
    "RiskLevel",
    "RouteAssessmentPipeline",
    "RunCancelled",
    "RunState",
    "Sample",
    "classify",
    "create_pipeline",
    "distance",
]
