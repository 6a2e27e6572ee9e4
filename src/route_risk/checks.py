"""Per-point hazard checks: nearby water features and recent rainfall.

Both checks fail soft. A failed call yields the conservative default
(no water, no rain) with ``checked=False`` so callers can tell a clean
result from a missing one.
"""

from __future__ import annotations

import logging

import httpx

from .models import CheckResult, Coordinate

logger = logging.getLogger(__name__)

OVERPASS_URL = "https://overpass-api.de/api/interpreter"
OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

WATER_FILTERS = (
    'way["natural"="water"]',
    'way["waterway"="riverbank"]',
    'relation["natural"="water"]',
    'node["natural"="water"]',
    'way["landuse"="reservoir"]',
)


def build_water_query(point: Coordinate, radius_m: float) -> str:
    """Overpass QL query for any water feature within ``radius_m`` of ``point``."""
    around = f"(around:{radius_m:g},{point.lat},{point.lon})"
    clauses = "\n".join(f"  {f}{around};" for f in WATER_FILTERS)
    return f"[out:json];\n(\n{clauses}\n);\nout ids;"


class WaterProximityChecker:
    """Look for mapped water features around a point via the Overpass API."""

    def __init__(self, client: httpx.AsyncClient, base_url: str = OVERPASS_URL):
        self.client = client
        self.base_url = base_url

    async def has_nearby_water(self, point: Coordinate, radius_m: float = 60) -> CheckResult:
        query = build_water_query(point, radius_m)
        try:
            response = await self.client.post(self.base_url, data={"data": query})
            response.raise_for_status()
            data = response.json()
            elements = data["elements"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning("Water check failed at (%s, %s): %s", point.lat, point.lon, e)
            return CheckResult(value=False, checked=False)

        # Overpass reports query timeouts and memory limits as a 200 with a remark
        remark = data.get("remark")
        if remark:
            logger.warning("Water check incomplete at (%s, %s): %s", point.lat, point.lon, remark)
            return CheckResult(value=False, checked=False)

        return CheckResult(value=bool(elements))


class PrecipitationChecker:
    """Sum recent hourly precipitation at a point from Open-Meteo."""

    def __init__(self, client: httpx.AsyncClient, base_url: str = OPEN_METEO_URL):
        self.client = client
        self.base_url = base_url

    async def recent_rainfall_mm(self, point: Coordinate, window_hours: int = 3) -> CheckResult:
        params = {
            "latitude": point.lat,
            "longitude": point.lon,
            "hourly": "precipitation",
            "past_hours": window_hours,
            "forecast_hours": 0,
        }
        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()
            series = response.json()["hourly"]["precipitation"]
            recent = series[max(0, len(series) - window_hours):]
            total = sum(float(v) for v in recent if v is not None)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning("Rain check failed at (%s, %s): %s", point.lat, point.lon, e)
            return CheckResult(value=0.0, checked=False)

        return CheckResult(value=max(0.0, total))
