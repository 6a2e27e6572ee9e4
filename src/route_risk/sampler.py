"""Thin a route polyline down to the points that get checked."""

from __future__ import annotations

import logging

from .geometry import distance
from .models import Coordinate, PathGeometry

logger = logging.getLogger(__name__)

SAMPLING_MODES = ("stride", "distance")


class PathSampler:
    """Select sample points from a path geometry.

    Two modes are supported:

    - ``stride``: every ``stride``-th vertex starting at index 0. Vertex spacing
      on a routed polyline is uneven, so this does not give even ground spacing.
    - ``distance``: the first vertex, then each vertex whose along-path distance
      from the previously kept vertex is at least ``spacing_m``.

    Both modes return a subset of the input vertices in their original order and
    always include the first vertex.
    """

    def __init__(self, mode: str = "stride", stride: int = 10, spacing_m: float = 500.0):
        if mode not in SAMPLING_MODES:
            raise ValueError(f"Unknown sampling mode: {mode!r}")
        if stride < 1:
            raise ValueError("stride must be at least 1")
        if spacing_m <= 0:
            raise ValueError("spacing_m must be positive")
        self.mode = mode
        self.stride = stride
        self.spacing_m = spacing_m

    def sample(self, path: PathGeometry) -> list[Coordinate]:
        vertices = path.coordinates
        if self.mode == "distance":
            points = _by_distance(vertices, self.spacing_m)
        else:
            points = vertices[:: self.stride]
        logger.debug("Sampled %d of %d vertices (%s)", len(points), len(vertices), self.mode)
        return points


def _by_distance(vertices: list[Coordinate], spacing_m: float) -> list[Coordinate]:
    points = [vertices[0]]
    travelled = 0.0
    for i in range(1, len(vertices)):
        travelled += distance(vertices[i - 1], vertices[i])
        if travelled >= spacing_m:
            points.append(vertices[i])
            travelled = 0.0
    return points
