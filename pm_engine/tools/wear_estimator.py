"""
Wear/Health Estimator

Converts usage (cycles, or operating hours for hour-based curves) into a
health percentage by piecewise-linear interpolation over the OEM wear curve.
"""

import logging
from bisect import bisect_right
from typing import Sequence

from pm_engine.models.equipment import WearPoint
from pm_engine.providers.oem_store import OEMProfileStore

logger = logging.getLogger(__name__)

NO_WEAR_MODEL_HEALTH = 100.0


def interpolate_wear_curve(curve: Sequence[WearPoint], usage: float) -> float:
    """
    Interpolate health at a given usage.

    Usage at or below the first point returns its health; at or beyond the
    last point returns the last health (clamped, never extrapolated).
    An empty curve means no wear model and returns 100.
    """
    if not curve:
        return NO_WEAR_MODEL_HEALTH

    first, last = curve[0], curve[-1]
    if usage <= first.cycles:
        return first.health_percent
    if usage >= last.cycles:
        return last.health_percent

    # curve[i].cycles <= usage < curve[i + 1].cycles
    i = bisect_right([p.cycles for p in curve], usage) - 1
    lo, hi = curve[i], curve[i + 1]
    ratio = (usage - lo.cycles) / (hi.cycles - lo.cycles)
    return lo.health_percent - ratio * (lo.health_percent - hi.health_percent)


class WearEstimator:
    """Health estimation from OEM wear curves."""

    def __init__(self, oem_store: OEMProfileStore):
        self.oem_store = oem_store

    def has_wear_model(self, equipment_type: str) -> bool:
        return bool(self.oem_store.get_profile(equipment_type).wear_curve)

    def estimate_health(self, equipment_type: str, cycle_count: float) -> float:
        """
        Estimate health (0-100) for an equipment type at a usage level.

        Raises:
            UnknownEquipmentTypeError: If the type has no OEM profile
        """
        profile = self.oem_store.get_profile(equipment_type)
        health = interpolate_wear_curve(profile.wear_curve, cycle_count)
        return max(0.0, min(100.0, health))
