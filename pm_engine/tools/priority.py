"""
Priority Classifier

Deterministic threshold ladder mapping health, remaining life and failure
mode probability to a maintenance priority.
"""

from typing import Iterable, List, TypeVar

from pm_engine.models.equipment import Priority

T = TypeVar("T")


class PriorityClassifier:
    """
    Classifies maintenance priority. Thresholds are strict (<): a health of
    exactly 50 is not "high" on health alone.
    """

    # (priority, health below, remaining-life percent below), evaluated top-down
    LADDER = [
        (Priority.CRITICAL, 30, 10),
        (Priority.HIGH, 50, 25),
        (Priority.MEDIUM, 70, 50),
    ]

    @classmethod
    def classify(
        cls,
        health: float,
        remaining_life_percent: float,
        has_high_probability_failure_mode: bool = False
    ) -> Priority:
        if has_high_probability_failure_mode:
            return Priority.CRITICAL
        for priority, health_below, life_below in cls.LADDER:
            if health < health_below or remaining_life_percent < life_below:
                return priority
        return Priority.LOW

    @staticmethod
    def sort_by_priority(items: Iterable[T], key=lambda item: item.priority) -> List[T]:
        """Sort critical first; items of equal priority keep their input order."""
        return sorted(items, key=lambda item: Priority(key(item)).rank)
