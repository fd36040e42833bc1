"""
Remaining-Life Calculator

Estimates remaining useful life from OEM rated life, derated by the
current health score.
"""

import logging
from typing import Optional

from pm_engine.models.analysis import RemainingLife
from pm_engine.providers.oem_store import OEMProfileStore

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24
# Remaining hours above one week are reported in days
DAYS_REPORTING_THRESHOLD_HOURS = 168
FALLBACK_LIFE_HOURS = 1000


def _percent(value: float) -> int:
    return int(max(0, min(100, round(value))))


class RemainingLifeCalculator:
    """Remaining-life policy: rated cycles, then rated hours, then health alone."""

    def __init__(self, oem_store: OEMProfileStore):
        self.oem_store = oem_store

    def calculate(
        self,
        equipment_type: str,
        health: float,
        operating_hours: float,
        cycle_count: Optional[float] = None
    ) -> RemainingLife:
        """
        Calculate remaining life.

        Args:
            equipment_type: OEM profile key
            health: Current health score (0-100)
            operating_hours: Operating hours to date
            cycle_count: Load cycles to date, if tracked

        Returns:
            RemainingLife with value, unit and percent remaining
        """
        specs = self.oem_store.get_profile(equipment_type).specs

        if cycle_count is not None and specs.expected_life_cycles:
            remaining = max(0.0, specs.expected_life_cycles - cycle_count)
            return RemainingLife(
                value=round(remaining),
                unit="cycles",
                percent_remaining=_percent(remaining / specs.expected_life_cycles * 100),
            )

        if specs.max_operating_hours:
            remaining_hours = max(0.0, specs.max_operating_hours - operating_hours)
            adjusted = remaining_hours * (health / 100)
            percent = _percent(adjusted / specs.max_operating_hours * 100)
            if adjusted > DAYS_REPORTING_THRESHOLD_HOURS:
                return RemainingLife(value=round(adjusted / HOURS_PER_DAY), unit="days", percent_remaining=percent)
            return RemainingLife(value=round(adjusted), unit="hours", percent_remaining=percent)

        estimated_hours = health / 100 * FALLBACK_LIFE_HOURS
        return RemainingLife(
            value=round(estimated_hours / HOURS_PER_DAY),
            unit="days",
            percent_remaining=_percent(health),
        )
