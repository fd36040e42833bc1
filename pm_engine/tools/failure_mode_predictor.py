"""
Failure-Mode Predictor

Ranks OEM failure modes for an equipment type against live vibration and
temperature. A deterministic heuristic, not a statistical model.
"""

import logging
from typing import List, Optional

from pm_engine.models.analysis import FailureModePrediction
from pm_engine.providers.oem_store import OEMProfileStore

logger = logging.getLogger(__name__)

SIGNAL_RATIO_THRESHOLD = 0.8
VIBRATION_MULTIPLIER = 1.5
TEMPERATURE_MULTIPLIER = 1.4
MAX_PROBABILITY = 0.95

VIBRATION_KEYWORDS = ("vibration",)
TEMPERATURE_KEYWORDS = ("temperature", "heat")


def _signals_mention(signals: List[str], keywords) -> bool:
    return any(kw in signal.lower() for signal in signals for kw in keywords)


class FailureModePredictor:
    """Selects the most probable failure mode given live signal ratios."""

    def __init__(self, oem_store: OEMProfileStore):
        self.oem_store = oem_store

    def predict(
        self,
        equipment_type: str,
        vibration: Optional[float] = None,
        temperature: Optional[float] = None
    ) -> Optional[FailureModePrediction]:
        """
        Pick the failure mode with the highest adjusted probability.

        A mode's base probability is multiplied by 1.5 when vibration exceeds
        80% of the rated maximum and its warning signals mention vibration,
        and by 1.4 when temperature exceeds 80% of the rated maximum and its
        signals mention temperature or heat. The reported probability is
        capped at 0.95. Ties keep the first mode in catalog order.

        Returns:
            FailureModePrediction, or None if the type has no failure modes
        """
        profile = self.oem_store.get_profile(equipment_type)
        specs = profile.specs

        vibration_high = bool(
            vibration and specs.max_vibration
            and vibration / specs.max_vibration > SIGNAL_RATIO_THRESHOLD
        )
        temperature_high = bool(
            temperature and specs.max_temperature
            and temperature / specs.max_temperature > SIGNAL_RATIO_THRESHOLD
        )

        best: Optional[FailureModePrediction] = None
        best_adjusted = 0.0

        for fm in profile.failure_modes:
            adjusted = fm.probability
            if vibration_high and _signals_mention(fm.warning_signals, VIBRATION_KEYWORDS):
                adjusted *= VIBRATION_MULTIPLIER
            if temperature_high and _signals_mention(fm.warning_signals, TEMPERATURE_KEYWORDS):
                adjusted *= TEMPERATURE_MULTIPLIER

            if best is None or adjusted > best_adjusted:
                best_adjusted = adjusted
                best = FailureModePrediction(
                    mode=fm.mode,
                    probability=min(MAX_PROBABILITY, adjusted),
                    warning_signals=list(fm.warning_signals),
                )

        if best is not None:
            logger.debug(f"{equipment_type}: most likely failure mode '{best.mode}' ({best.probability:.2f})")
        return best
