"""
Cost and Downtime Estimator

Turns a priority tier and the OEM task schedule into repair cost, cost of
inaction, downtime and maintenance-window estimates, plus the
human-readable title, description and recommended action.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from pm_engine.models.analysis import (
    CostRange,
    DowntimeRange,
    FailureModePrediction,
    MaintenanceTaskDue,
    MaintenanceWindow,
    MoneyAmount,
    RemainingLife,
)
from pm_engine.models.equipment import EquipmentProfile, Priority
from pm_engine.models.history import EquipmentIssue

logger = logging.getLogger(__name__)

COST_MULTIPLIERS: Dict[Priority, float] = {
    Priority.CRITICAL: 3,
    Priority.HIGH: 2,
    Priority.MEDIUM: 1.5,
    Priority.LOW: 1,
}

TITLE_SUFFIXES: Dict[Priority, str] = {
    Priority.CRITICAL: "Immediate Action Required",
    Priority.HIGH: "Maintenance Due Soon",
    Priority.MEDIUM: "Schedule Maintenance",
    Priority.LOW: "Monitor Condition",
}

ALTERNATIVE_ACTIONS = [
    "Increase monitoring frequency",
    "Order spare parts preemptively",
    "Coordinate with operations for maintenance window",
]

HOURLY_RATE = 500
DEFAULT_BASE_COST = 10000
WINDOW_START_DAYS = 7
WINDOW_END_DAYS = 14


class CostEstimator:
    """Priority-scaled cost, downtime and narrative fields for a prediction."""

    def __init__(self, currency: str = "USD"):
        self.currency = currency

    @staticmethod
    def base_cost(profile: EquipmentProfile) -> float:
        """Duration of the heaviest (last) OEM task at the hourly rate."""
        if profile.maintenance_tasks and profile.maintenance_tasks[-1].estimated_duration:
            return profile.maintenance_tasks[-1].estimated_duration * HOURLY_RATE
        return DEFAULT_BASE_COST

    def cost_of_inaction(self, profile: EquipmentProfile, priority: Priority) -> MoneyAmount:
        m = COST_MULTIPLIERS[priority]
        return MoneyAmount(
            amount=round(self.base_cost(profile) * m * 2),
            currency=self.currency,
            description=f"Unplanned failure could result in {round(24 * m)}-{round(72 * m)} hours downtime",
        )

    def repair_cost(self, profile: EquipmentProfile) -> CostRange:
        base = self.base_cost(profile)
        return CostRange(min=round(base * 0.8), max=round(base * 1.5), currency=self.currency)

    @staticmethod
    def downtime(priority: Priority) -> DowntimeRange:
        m = COST_MULTIPLIERS[priority]
        return DowntimeRange(min=round(8 * m), max=round(24 * m), unit="hours")

    @staticmethod
    def maintenance_window(now: datetime) -> MaintenanceWindow:
        return MaintenanceWindow(
            start=now + timedelta(days=WINDOW_START_DAYS),
            end=now + timedelta(days=WINDOW_END_DAYS),
        )

    @staticmethod
    def title(equipment_name: str, priority: Priority) -> str:
        return f"{equipment_name} - {TITLE_SUFFIXES[priority]}"

    @staticmethod
    def description(
        failure_mode: Optional[FailureModePrediction],
        known_issue: Optional[EquipmentIssue] = None
    ) -> str:
        if known_issue is not None:
            prediction = known_issue.pm_prediction
            return (
                f"Primary concern: {prediction.predicted_issue}. "
                f"Warning signs include: {', '.join(prediction.warning_signals)}."
            )
        if failure_mode is not None:
            return (
                f"Primary concern: {failure_mode.mode}. "
                f"Warning signs include: {', '.join(failure_mode.warning_signals[:2])}."
            )
        return "Equipment operating within parameters but approaching maintenance threshold."

    @staticmethod
    def recommended_action(
        next_task: Optional[MaintenanceTaskDue],
        remaining_life: RemainingLife,
        known_issue: Optional[EquipmentIssue] = None
    ) -> str:
        if known_issue is not None:
            return known_issue.pm_prediction.recommended_action
        if next_task is not None:
            action = f'Schedule "{next_task.task}" within {next_task.due_in_hours:g} operating hours.'
            if next_task.parts:
                action += f" Parts required: {', '.join(next_task.parts)}"
            return action
        return (
            f"Continue monitoring. Next inspection recommended in "
            f"{round(remaining_life.value * 0.3)} {remaining_life.unit}."
        )

    @staticmethod
    def alternative_actions() -> List[str]:
        return list(ALTERNATIVE_ACTIONS)
