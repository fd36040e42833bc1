"""
Unit tests for cost, downtime and narrative fields.
"""

from datetime import timedelta

import pytest

from pm_engine.models.analysis import FailureModePrediction, MaintenanceTaskDue, RemainingLife
from pm_engine.models.equipment import EquipmentProfile, Priority
from pm_engine.tools.cost_estimator import CostEstimator

from pm_engine.conftest import FIXED_NOW


@pytest.fixture
def estimator():
    return CostEstimator(currency="USD")


def test_base_cost_from_last_task(oem_store):
    # Full replacement: 24 h at 500/h
    assert CostEstimator.base_cost(oem_store.get_profile("wire_rope")) == 12000


def test_base_cost_default_without_tasks():
    profile = EquipmentProfile(id="oem-bare", equipment_type="bare", manufacturer="X", model="Y")
    assert CostEstimator.base_cost(profile) == 10000


@pytest.mark.parametrize("priority, amount, hours", [
    (Priority.CRITICAL, 72000, "72-216"),
    (Priority.HIGH, 48000, "48-144"),
    (Priority.MEDIUM, 36000, "36-108"),
    (Priority.LOW, 24000, "24-72"),
])
def test_cost_of_inaction_scales_with_priority(estimator, oem_store, priority, amount, hours):
    cost = estimator.cost_of_inaction(oem_store.get_profile("wire_rope"), priority)
    assert cost.amount == amount
    assert cost.currency == "USD"
    assert f"{hours} hours downtime" in cost.description


def test_repair_cost_and_downtime(estimator, oem_store):
    repair = estimator.repair_cost(oem_store.get_profile("wire_rope"))
    assert (repair.min, repair.max) == (9600, 18000)

    downtime = estimator.downtime(Priority.HIGH)
    assert (downtime.min, downtime.max, downtime.unit) == (16, 48, "hours")


def test_maintenance_window():
    window = CostEstimator.maintenance_window(FIXED_NOW)
    assert window.start == FIXED_NOW + timedelta(days=7)
    assert window.end == FIXED_NOW + timedelta(days=14)


def test_title():
    assert CostEstimator.title("Hoist Motor", Priority.CRITICAL) == "Hoist Motor - Immediate Action Required"
    assert CostEstimator.title("Hoist Motor", Priority.LOW) == "Hoist Motor - Monitor Condition"


def test_description_sources(engine_issue):
    failure_mode = FailureModePrediction(
        mode="Bearing failure", probability=0.4,
        warning_signals=["Increased vibration", "Abnormal noise", "Temperature rise"],
    )
    assert CostEstimator.description(failure_mode) == (
        "Primary concern: Bearing failure. Warning signs include: Increased vibration, Abnormal noise."
    )
    assert CostEstimator.description(failure_mode, engine_issue).startswith(
        "Primary concern: Turbocharger bearing failure."
    )
    assert "approaching maintenance threshold" in CostEstimator.description(None)


def test_recommended_action(engine_issue):
    life = RemainingLife(value=100, unit="days", percent_remaining=40)
    task = MaintenanceTaskDue(task="Bearing regreasing", due_in_hours=100, estimated_duration=2,
                              parts=["High-temp bearing grease 1kg"])

    assert CostEstimator.recommended_action(task, life) == (
        'Schedule "Bearing regreasing" within 100 operating hours. Parts required: High-temp bearing grease 1kg'
    )
    assert CostEstimator.recommended_action(None, life) == (
        "Continue monitoring. Next inspection recommended in 30 days."
    )
    assert CostEstimator.recommended_action(task, life, engine_issue) == (
        "Replace turbocharger cartridge at next port call"
    )
