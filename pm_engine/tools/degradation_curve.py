"""
Degradation Curve Generator

Produces a "where we've been / where we're headed" health series for
display: a linear history from full health to today, then a pessimistic
linear projection. Not a statistical forecast.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from pm_engine.models.analysis import DegradationPoint
from pm_engine.providers.oem_store import OEMProfileStore

logger = logging.getLogger(__name__)

HISTORY_STEPS = 10
FUTURE_POINTS = 5
PESSIMISM_FACTOR = 1.2
DEFAULT_MAX_HOURS = 20000
DEFAULT_OPERATING_HOURS = 5000
PROJECTION_STEP_DAYS = 30


class DegradationCurveGenerator:

    def __init__(self, oem_store: OEMProfileStore):
        self.oem_store = oem_store

    def generate(
        self,
        current_health: float,
        operating_hours: Optional[float],
        equipment_type: str,
        now: datetime
    ) -> List[DegradationPoint]:
        """
        Build 11 historical points (daily, ending today) and 5 projected
        points (monthly from today).

        The projection degrades at the historical average rate scaled by 1.2,
        over hour steps of a tenth of the remaining rated life, floored at 0.
        Missing or zero operating hours fall back to 5000.
        """
        max_hours = self.oem_store.get_profile(equipment_type).specs.max_operating_hours or DEFAULT_MAX_HOURS
        hours = operating_hours or DEFAULT_OPERATING_HOURS
        points: List[DegradationPoint] = []

        for i in range(HISTORY_STEPS + 1):
            health = 100 - (100 - current_health) * (i / HISTORY_STEPS)
            points.append(DegradationPoint(
                timestamp=now - timedelta(days=HISTORY_STEPS - i),
                health_score=round(health, 1),
                is_projected=False,
            ))

        degradation_rate = (100 - current_health) / hours
        # Past rated life the projection holds flat rather than recovering
        future_hours_per_point = max(0.0, (max_hours - hours) / FUTURE_POINTS / 2)

        for i in range(1, FUTURE_POINTS + 1):
            projected = current_health - degradation_rate * future_hours_per_point * i * PESSIMISM_FACTOR
            points.append(DegradationPoint(
                timestamp=now + timedelta(days=PROJECTION_STEP_DAYS * i),
                health_score=round(max(0.0, projected), 1),
                is_projected=True,
            ))

        return points
