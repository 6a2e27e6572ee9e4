"""End-to-end route risk assessment.

A run moves through ``idle -> resolving_locations -> fetching_route ->
sampling -> done``; any hard failure ends it in ``error``. Each run owns a
:class:`PipelineRunContext`. Starting a new run cancels the previous one's
token, and a cancelled run raises :class:`RunCancelled` at its next
suspension point without publishing anything further.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx

from .checks import PrecipitationChecker, WaterProximityChecker
from .config import Settings
from .errors import AssessmentError, RunCancelled
from .geocoder import GeoResolver
from .models import (
    AssessmentResult,
    Coordinate,
    LocationInput,
    PathGeometry,
    RiskLevel,
    RunState,
    Sample,
)
from .risk import classify, status_line
from .routing import RouteProvider
from .sampler import PathSampler

logger = logging.getLogger(__name__)

StatusCallback = Callable[[RunState, str], None]
RouteCallback = Callable[[PathGeometry], None]
SampleCallback = Callable[[Sample], None]


class CancellationToken:
    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise RunCancelled("Run was superseded by a newer request")


@dataclass
class PipelineRunContext:
    """Everything one run owns. Discarded when the next run starts."""

    origin: LocationInput
    destination: LocationInput
    token: CancellationToken = field(default_factory=CancellationToken)
    state: RunState = RunState.IDLE
    status: str = ""
    origin_coordinate: Optional[Coordinate] = None
    destination_coordinate: Optional[Coordinate] = None
    path: Optional[PathGeometry] = None
    samples: list[Sample] = field(default_factory=list)
    any_water: bool = False
    max_rain_mm: float = 0.0
    risk_level: Optional[RiskLevel] = None


class RouteAssessmentPipeline:
    """Orchestrates geocoding, routing, sampling, per-sample checks and classification.

    Samples are checked one at a time in path order so ``on_sample`` sees
    markers in the same order they appear along the route.
    """

    def __init__(
        self,
        resolver: GeoResolver,
        router: RouteProvider,
        water_checker: WaterProximityChecker,
        rain_checker: PrecipitationChecker,
        sampler: PathSampler | None = None,
        *,
        water_radius_m: float = 60,
        rain_window_hours: int = 3,
        on_status: StatusCallback | None = None,
        on_route: RouteCallback | None = None,
        on_sample: SampleCallback | None = None,
    ):
        self.resolver = resolver
        self.router = router
        self.water_checker = water_checker
        self.rain_checker = rain_checker
        self.sampler = sampler or PathSampler()
        self.water_radius_m = water_radius_m
        self.rain_window_hours = rain_window_hours
        self.on_status = on_status
        self.on_route = on_route
        self.on_sample = on_sample
        self._current: PipelineRunContext | None = None

    @property
    def state(self) -> RunState:
        return self._current.state if self._current else RunState.IDLE

    @property
    def status(self) -> str:
        return self._current.status if self._current else ""

    async def run(self, origin: LocationInput, destination: LocationInput) -> AssessmentResult:
        """Assess one route. Hard failures come back as an ``error`` result.

        Raises :class:`RunCancelled` if a newer run started before this one finished.
        """
        if self._current is not None and self._current.state.is_active:
            logger.info("Superseding in-flight run (%s)", self._current.state.value)
            self._current.token.cancel()

        ctx = PipelineRunContext(origin=origin, destination=destination)
        self._current = ctx

        try:
            await self._execute(ctx)
        except AssessmentError as e:
            ctx.token.raise_if_cancelled()
            logger.error("Assessment failed (%s): %s", e.code, e)
            self._transition(ctx, RunState.ERROR, f"Error: {e}")
            return self._result(ctx, error=e)
        except RunCancelled:
            logger.info("Run cancelled")
            raise
        except Exception:
            self._transition(ctx, RunState.ERROR, "Error: unexpected failure")
            raise

        return self._result(ctx)

    async def _execute(self, ctx: PipelineRunContext) -> None:
        token = ctx.token

        self._transition(ctx, RunState.RESOLVING_LOCATIONS, "Resolving locations...")
        ctx.origin_coordinate = await self.resolver.resolve(ctx.origin)
        token.raise_if_cancelled()
        ctx.destination_coordinate = await self.resolver.resolve(ctx.destination)
        token.raise_if_cancelled()

        self._transition(ctx, RunState.FETCHING_ROUTE, "Fetching route...")
        ctx.path = await self.router.get_route(ctx.origin_coordinate, ctx.destination_coordinate)
        token.raise_if_cancelled()

        points = self.sampler.sample(ctx.path)
        ctx.samples = [Sample(index=i, coordinate=p) for i, p in enumerate(points)]
        self._transition(
            ctx, RunState.SAMPLING, f"Checking {len(points)} points along the route..."
        )
        self._publish(ctx, self.on_route, ctx.path)

        for sample in ctx.samples:
            water = await self.water_checker.has_nearby_water(sample.coordinate, self.water_radius_m)
            token.raise_if_cancelled()
            sample.has_water = bool(water.value) if water.checked else None

            rain = await self.rain_checker.recent_rainfall_mm(sample.coordinate, self.rain_window_hours)
            token.raise_if_cancelled()
            sample.rain_mm = float(rain.value) if rain.checked else None

            ctx.any_water = ctx.any_water or bool(water.value)
            ctx.max_rain_mm = max(ctx.max_rain_mm, float(rain.value))
            self._publish(ctx, self.on_sample, sample)

        ctx.risk_level = classify(ctx.any_water, ctx.max_rain_mm)
        logger.info(
            "Route assessed: %s risk over %d samples (water=%s, max_rain=%.1f mm)",
            ctx.risk_level.value,
            len(ctx.samples),
            ctx.any_water,
            ctx.max_rain_mm,
        )
        self._transition(
            ctx,
            RunState.DONE,
            status_line(ctx.risk_level, ctx.any_water, ctx.max_rain_mm, self.rain_window_hours),
        )

    def _transition(self, ctx: PipelineRunContext, state: RunState, message: str) -> None:
        ctx.state = state
        ctx.status = message
        self._publish(ctx, self.on_status, state, message)

    def _publish(self, ctx: PipelineRunContext, callback: Callable | None, *args) -> None:
        # Only the current run may touch the rendering surface
        if callback is not None and ctx is self._current and not ctx.token.cancelled:
            callback(*args)

    def _result(self, ctx: PipelineRunContext, error: AssessmentError | None = None) -> AssessmentResult:
        unchecked = sum(1 for s in ctx.samples if not (s.water_checked and s.rain_checked))
        if error is not None:
            return AssessmentResult(
                state=ctx.state,
                status=ctx.status,
                origin=ctx.origin_coordinate,
                destination=ctx.destination_coordinate,
                error_code=error.code,
                error=str(error),
            )
        return AssessmentResult(
            state=ctx.state,
            status=ctx.status,
            origin=ctx.origin_coordinate,
            destination=ctx.destination_coordinate,
            path=ctx.path,
            samples=ctx.samples,
            risk_level=ctx.risk_level,
            any_water=ctx.any_water,
            max_rain_mm=ctx.max_rain_mm,
            unchecked_samples=unchecked,
        )


def create_pipeline(settings: Settings, client: httpx.AsyncClient, **callbacks) -> RouteAssessmentPipeline:
    """Wire the HTTP-backed collaborators from settings around a shared client."""
    sampler = PathSampler(
        mode=settings.sampling_mode,
        stride=settings.sample_stride,
        spacing_m=settings.sample_spacing_m,
    )
    return RouteAssessmentPipeline(
        resolver=GeoResolver(client, settings.nominatim_url, settings.user_agent),
        router=RouteProvider(client, settings.osrm_url),
        water_checker=WaterProximityChecker(client, settings.overpass_url),
        rain_checker=PrecipitationChecker(client, settings.open_meteo_url),
        sampler=sampler,
        water_radius_m=settings.water_radius_m,
        rain_window_hours=settings.rain_window_hours,
        **callbacks,
    )
