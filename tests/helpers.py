"""Shared fakes and builders for the test suite."""

import httpx

from route_risk import CheckResult, Coordinate, LocationInput, PathGeometry

ORIGIN = Coordinate(lat=12.9716, lon=77.5946)
DESTINATION = Coordinate(lat=12.9352, lon=77.6245)


def mock_client(handler) -> httpx.AsyncClient:
    """An AsyncClient whose requests are answered by ``handler(request)``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def straight_path(n: int, step_deg: float = 0.001) -> PathGeometry:
    """``n`` vertices heading east along the equator, ``step_deg`` apart."""
    return PathGeometry(coordinates=[Coordinate(lat=0.0, lon=i * step_deg) for i in range(n)])


class FakeResolver:
    def __init__(self, addresses: dict, failures: dict | None = None, gates: dict | None = None):
        self.addresses = addresses
        self.failures = failures or {}
        self.gates = gates or {}
        self.calls: list[LocationInput] = []

    async def resolve(self, location: LocationInput) -> Coordinate:
        self.calls.append(location)
        if location.pinned is not None:
            return location.pinned
        if location.address in self.gates:
            await self.gates[location.address].wait()
        if location.address in self.failures:
            raise self.failures[location.address]
        return self.addresses[location.address]


class FakeRouter:
    def __init__(self, path: PathGeometry | None = None, error: Exception | None = None):
        self.path = path
        self.error = error
        self.calls: list[tuple[Coordinate, Coordinate]] = []

    async def get_route(self, origin: Coordinate, destination: Coordinate) -> PathGeometry:
        self.calls.append((origin, destination))
        if self.error is not None:
            raise self.error
        return self.path


class FakeWaterChecker:
    """Answers from ``results`` in call order, or ``default`` once they run out."""

    def __init__(self, results=None, default=CheckResult(value=False), log: list | None = None):
        self.results = list(results or [])
        self.default = default
        self.log = log if log is not None else []
        self.calls: list[tuple[Coordinate, float]] = []

    async def has_nearby_water(self, point: Coordinate, radius_m: float = 60) -> CheckResult:
        self.calls.append((point, radius_m))
        self.log.append(("water", point))
        return self.results.pop(0) if self.results else self.default


class FakeRainChecker:
    def __init__(self, results=None, default=CheckResult(value=0.0), log: list | None = None):
        self.results = list(results or [])
        self.default = default
        self.log = log if log is not None else []
        self.calls: list[tuple[Coordinate, int]] = []

    async def recent_rainfall_mm(self, point: Coordinate, window_hours: int = 3) -> CheckResult:
        self.calls.append((point, window_hours))
        self.log.append(("rain", point))
        return self.results.pop(0) if self.results else self.default
