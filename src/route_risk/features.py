"""GeoJSON payload the map UI draws: the route polyline plus one marker per sample."""

from __future__ import annotations

from .geometry import path_length
from .models import AssessmentResult, Sample
from .risk import MODERATE_RAIN_MM

MARKER_COLORS = {
    "both": "#d73027",
    "one": "#fc8d59",
    "unknown": "#999999",
    "clear": "#1a9850",
}


def marker_style(sample: Sample) -> str:
    """Pick a marker color key: both signals flagged, one flagged, unchecked, or clear."""
    water = bool(sample.has_water)
    rain = (sample.rain_mm or 0.0) > MODERATE_RAIN_MM
    if water and rain:
        return "both"
    if water or rain:
        return "one"
    if not (sample.water_checked and sample.rain_checked):
        return "unknown"
    return "clear"


def to_feature_collection(result: AssessmentResult) -> dict:
    """Convert an assessment result to a GeoJSON FeatureCollection."""
    features: list[dict] = []

    if result.path is not None:
        coords = result.path.coordinates
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [[c.lon, c.lat] for c in coords],
            },
            "properties": {
                "kind": "route",
                "risk_level": result.risk_level.value if result.risk_level else None,
                "distance_m": result.path.distance_m if result.path.distance_m is not None else path_length(coords),
                "duration_s": result.path.duration_s,
            },
        })

    for sample in result.samples:
        style = marker_style(sample)
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [sample.coordinate.lon, sample.coordinate.lat],
            },
            "properties": {
                "kind": "sample",
                "index": sample.index,
                "has_water": sample.has_water,
                "rain_mm": sample.rain_mm,
                "style": style,
                "marker-color": MARKER_COLORS[style],
            },
        })

    return {
        "type": "FeatureCollection",
        "features": features,
        "properties": {
            "state": result.state.value,
            "status": result.status,
            "risk_level": result.risk_level.value if result.risk_level else None,
            "any_water": result.any_water,
            "max_rain_mm": result.max_rain_mm,
            "unchecked_samples": result.unchecked_samples,
        },
    }
