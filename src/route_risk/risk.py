"""Route-level risk classification."""

from .models import RiskLevel

HEAVY_RAIN_MM = 10.0
MODERATE_RAIN_MM = 5.0


def classify(any_water: bool, max_rain_mm: float) -> RiskLevel:
    """Combine the route's water and rain findings into a risk level.

    Water alongside heavy rain is High. Moderate rain on its own, or water
    with little rain, is Medium. Everything else is Low.
    """
    if any_water and max_rain_mm > HEAVY_RAIN_MM:
        return RiskLevel.HIGH
    if max_rain_mm > MODERATE_RAIN_MM or any_water:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def status_line(risk: RiskLevel, any_water: bool, max_rain_mm: float, window_hours: int = 3) -> str:
    water = "yes" if any_water else "no"
    return (
        f"Risk Level: {risk.value} | Water nearby: {water} | "
        f"Max rain ({window_hours}h): {max_rain_mm:.1f} mm"
    )
