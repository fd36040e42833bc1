"""
Unit tests for priority classification and ordering.
"""

from types import SimpleNamespace

import pytest

from pm_engine.models.equipment import Priority
from pm_engine.tools.priority import PriorityClassifier


@pytest.mark.parametrize("health, life_percent, expected", [
    (29, 100, Priority.CRITICAL),
    (80, 9, Priority.CRITICAL),
    (49.9, 100, Priority.HIGH),
    (80, 24, Priority.HIGH),
    (50, 60, Priority.MEDIUM),
    (69, 100, Priority.MEDIUM),
    (80, 49, Priority.MEDIUM),
    (70, 50, Priority.LOW),
    (100, 100, Priority.LOW),
])
def test_threshold_ladder(health, life_percent, expected):
    assert PriorityClassifier.classify(health, life_percent) == expected


def test_high_probability_failure_mode_is_critical():
    assert PriorityClassifier.classify(100, 100, True) == Priority.CRITICAL


def test_priority_is_monotonic_in_health():
    for life_percent in (5, 20, 40, 60, 100):
        ranks = [
            PriorityClassifier.classify(health, life_percent).rank
            for health in range(100, -1, -1)
        ]
        # rank 0 is most severe, so severity never drops as health falls
        assert all(a >= b for a, b in zip(ranks, ranks[1:]))


def test_sort_is_stable_within_priority():
    items = [
        SimpleNamespace(name="a", priority=Priority.LOW),
        SimpleNamespace(name="b", priority=Priority.CRITICAL),
        SimpleNamespace(name="c", priority=Priority.MEDIUM),
        SimpleNamespace(name="d", priority=Priority.CRITICAL),
    ]
    ordered = PriorityClassifier.sort_by_priority(items)
    assert [i.name for i in ordered] == ["b", "d", "c", "a"]
    assert [i.priority for i in ordered] == [
        Priority.CRITICAL, Priority.CRITICAL, Priority.MEDIUM, Priority.LOW
    ]


def test_sort_accepts_plain_strings():
    items = [SimpleNamespace(priority="low"), SimpleNamespace(priority="high")]
    ordered = PriorityClassifier.sort_by_priority(items)
    assert [i.priority for i in ordered] == ["high", "low"]


def test_sort_empty():
    assert PriorityClassifier.sort_by_priority([]) == []
