"""Resolve route endpoints to coordinates via Nominatim."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .errors import NotFound, ProviderError
from .models import Coordinate, LocationInput

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


class GeoResolver:
    """Turn a :class:`LocationInput` into a :class:`Coordinate`.

    Pinned coordinates are returned as-is. Address text is looked up with a
    single Nominatim search and the first candidate is used.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = NOMINATIM_URL,
        user_agent: str = "route-risk",
    ):
        self.client = client
        self.base_url = base_url
        self.user_agent = user_agent

    async def resolve(self, location: LocationInput) -> Coordinate:
        if location.pinned is not None:
            return location.pinned

        query = (location.address or "").strip()
        params = {"format": "json", "q": query, "limit": 1}
        headers = {"User-Agent": self.user_agent}

        try:
            response = await self.client.get(self.base_url, params=params, headers=headers)
            response.raise_for_status()
            results = response.json()
        except httpx.TimeoutException as e:
            raise ProviderError(f"Geocoding timed out for '{query}'") from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"Geocoding failed with HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Geocoding request failed: {e}") from e
        except ValueError as e:
            raise ProviderError("Geocoding returned a malformed response") from e

        if not isinstance(results, list):
            raise ProviderError("Geocoding returned a malformed response")
        if not results:
            raise NotFound(f"Location not found: {query}")

        first = results[0]
        try:
            coordinate = Coordinate(lat=float(first["lat"]), lon=float(first["lon"]))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise ProviderError("Geocoding candidate has no usable coordinates") from e

        logger.info("Geocoded '%s' -> (%s, %s)", query, coordinate.lat, coordinate.lon)
        return coordinate
