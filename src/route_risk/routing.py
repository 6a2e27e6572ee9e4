"""Driving route geometry from an OSRM server."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .errors import NoRouteFound, ProviderError
from .models import Coordinate, PathGeometry

logger = logging.getLogger(__name__)

OSRM_URL = "https://router.project-osrm.org/route/v1/driving"

# OSRM response codes meaning "the request was fine, there is just no route"
NO_ROUTE_CODES = {"NoRoute", "NoSegment"}


class RouteProvider:
    """Fetch the best driving route between two coordinates."""

    def __init__(self, client: httpx.AsyncClient, base_url: str = OSRM_URL):
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def get_route(self, origin: Coordinate, destination: Coordinate) -> PathGeometry:
        coords_str = f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}"
        url = f"{self.base_url}/{coords_str}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "alternatives": "false",
            "steps": "false",
        }

        logger.info("Requesting route %s", coords_str)
        try:
            response = await self.client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise ProviderError("Routing request timed out") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Routing request failed: {e}") from e

        # OSRM reports routing failures as JSON bodies on 4xx responses
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"Routing failed with HTTP {response.status_code}") from e
        if not isinstance(data, dict):
            raise ProviderError("Routing returned a malformed response")

        code = data.get("code")
        if code in NO_ROUTE_CODES:
            raise NoRouteFound(data.get("message") or "No route found between these points")
        if code != "Ok" or response.is_error:
            logger.error("OSRM error %s: %s", response.status_code, code)
            raise ProviderError(f"Routing failed: {data.get('message') or code}")

        routes = data.get("routes") or []
        if not routes:
            raise NoRouteFound("No route found between these points")

        best = routes[0]
        try:
            raw = (best.get("geometry") or {}).get("coordinates") or []
            if not raw:
                raise NoRouteFound("Route has no geometry")
            path = PathGeometry(
                coordinates=[Coordinate(lat=lat, lon=lon) for lon, lat, *_ in raw],
                distance_m=best.get("distance"),
                duration_s=best.get("duration"),
            )
        except (AttributeError, TypeError, ValueError, ValidationError) as e:
            raise ProviderError("Routing returned a malformed geometry") from e

        logger.info("Route has %d vertices", len(path.coordinates))
        return path
