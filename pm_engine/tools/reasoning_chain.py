"""
Reasoning Chain Builder

Narrates the evidence behind a prediction as an ordered list of
source-attributed steps, each with a confidence score.

Step order is fixed:
    0. Known-issue override (only when one exists)
    1. Operating hours and health
    2. Cycle count against OEM rated cycles
    3. Next scheduled OEM maintenance task
    4. Recent corrective maintenance history
    5. Matching fleet pattern
    6. Vibration ratio
    7. Temperature ratio
    8. Selected failure mode
Steps whose evidence is missing are skipped.
"""

import logging
from typing import List, Optional

from pm_engine.models.analysis import FailureModePrediction, MaintenanceTaskDue, ReasoningStep
from pm_engine.models.equipment import EquipmentInstance, EquipmentProfile, SourceType
from pm_engine.models.history import EquipmentIssue, FleetPattern, HistoricalRecords

logger = logging.getLogger(__name__)

# Fallbacks used only for narration when the OEM profile lacks a rating
DEFAULT_RATED_CYCLES = 15000
DEFAULT_MAX_VIBRATION = 5.0
DEFAULT_MAX_TEMPERATURE = 80.0

RECENT_CM_LIMIT = 3
ELEVATED_RATIO = 0.8
MODERATE_RATIO = 0.6


def format_number(value: Optional[float]) -> str:
    """Thousands-separated number, without decimals when integral."""
    if value is None:
        return "N/A"
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.1f}"


class ReasoningChainBuilder:
    """Builds the reasoning chain for one equipment item."""

    def __init__(self, equipment: EquipmentInstance, profile: EquipmentProfile):
        self.equipment = equipment
        self.profile = profile
        self.steps: List[ReasoningStep] = []

    def _add(self, text: str, source_type: SourceType, confidence: float, is_key: bool = False) -> None:
        self.steps.append(ReasoningStep(
            id=f"{self.equipment.id}-step-{len(self.steps) + 1}",
            text=text,
            source_type=source_type,
            confidence=max(0, min(100, confidence)),
            is_key=is_key,
        ))

    def build(
        self,
        health: float,
        records: HistoricalRecords,
        fleet_patterns: List[FleetPattern],
        failure_mode: Optional[FailureModePrediction],
        next_task: Optional[MaintenanceTaskDue] = None,
        known_issue: Optional[EquipmentIssue] = None
    ) -> List[ReasoningStep]:
        """
        Build the ordered reasoning chain.

        Args:
            health: Resolved health score for the item
            records: Work-order, inspection and oil history
            fleet_patterns: Fleet patterns for the equipment type
            failure_mode: Selected failure mode, if any
            next_task: Next OEM maintenance task, if computable
            known_issue: External override, narrated ahead of all computed steps

        Returns:
            List of ReasoningStep
        """
        self.steps = []
        equipment = self.equipment
        specs = self.profile.specs

        if known_issue is not None:
            self._add(
                f"Known issue detected: {known_issue.issue}. Status: {known_issue.status.upper()}.",
                SourceType.LIVE_TELEMETRY, 95, is_key=True,
            )

        hours_text = format_number(equipment.operating_hours)
        self._add(
            f"Current operating hours: {hours_text}h with health score at {format_number(health)}%",
            SourceType.LIVE_TELEMETRY, 95,
        )

        if equipment.cycle_count is not None:
            rated = specs.expected_life_cycles or DEFAULT_RATED_CYCLES
            usage_percent = equipment.cycle_count / rated * 100
            self._add(
                f"Cycle count at {format_number(equipment.cycle_count)} "
                f"({usage_percent:.1f}% of OEM rated {format_number(rated)} cycles)",
                SourceType.OEM_SPECS, 100,
            )

        if specs.maintenance_interval_hours and equipment.operating_hours and next_task is not None:
            self._add(
                f'OEM recommends "{next_task.task}" in {format_number(next_task.due_in_hours)} operating hours',
                SourceType.OEM_SPECS, 100,
            )

        recent_cm = records.corrective()[:RECENT_CM_LIMIT]
        if recent_cm:
            self._add(
                f"{len(recent_cm)} corrective maintenance events in past 6 months - "
                f'most recent: "{recent_cm[0].issue}"',
                SourceType.WORK_HISTORY, 88, is_key=len(recent_cm) >= 2,
            )

        relevant = [p for p in fleet_patterns if p.equipment_type == equipment.type]
        if relevant:
            pattern = relevant[0]
            self._add(
                f"Fleet analysis: {pattern.occurrences} similar {equipment.type.replace('_', ' ')}s showed "
                f'"{pattern.pattern}" - avg failure at '
                f"{format_number(pattern.average_failure_point.value)} {pattern.average_failure_point.unit}",
                SourceType.FLEET_DATA, 82, is_key=True,
            )

        if equipment.vibration is not None:
            max_vib = specs.max_vibration or DEFAULT_MAX_VIBRATION
            ratio = equipment.vibration / max_vib
            if ratio > ELEVATED_RATIO:
                status = "elevated"
            elif ratio > MODERATE_RATIO:
                status = "moderate"
            else:
                status = "normal"
            meaning = "bearing or alignment concern" if status == "elevated" else "acceptable wear pattern"
            self._add(
                f"Vibration at {equipment.vibration} mm/s ({ratio * 100:.0f}% of threshold) - "
                f"{status} level indicates {meaning}",
                SourceType.LIVE_TELEMETRY, 90, is_key=status == "elevated",
            )

        if equipment.temperature is not None:
            max_temp = specs.max_temperature or DEFAULT_MAX_TEMPERATURE
            self._add(
                f"Operating temperature {equipment.temperature}°C "
                f"({equipment.temperature / max_temp * 100:.0f}% of max rated {format_number(max_temp)}°C)",
                SourceType.LIVE_TELEMETRY, 92,
            )

        if failure_mode is not None:
            self._add(
                f'Most probable failure mode: "{failure_mode.mode}" '
                f"({failure_mode.probability * 100:.0f}% probability based on current indicators)",
                SourceType.INDUSTRY_STANDARDS, round(failure_mode.probability * 100), is_key=True,
            )

        logger.debug(f"{equipment.id}: reasoning chain with {len(self.steps)} steps")
        return self.steps
