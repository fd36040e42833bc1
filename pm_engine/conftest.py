"""
Shared pytest fixtures for the predictive maintenance engine test suite.
Provides a fixed clock, the bundled OEM store and quiet collaborators.
"""

from datetime import datetime, timezone
from typing import Optional

import pytest

from pm_engine.config import EngineSettings
from pm_engine.models.equipment import AnalysisRequest, AssetType, EquipmentInstance, Priority
from pm_engine.models.history import EquipmentIssue, HistoricalRecords, IssuePMPrediction
from pm_engine.pm_orchestrator import PMOrchestrator
from pm_engine.providers.base import HistoricalRecordsProvider, KnownIssueLookup
from pm_engine.providers.oem_store import OEMProfileStore

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


# ─── Collaborator doubles ────────────────────────────────────────────────────
class EmptyHistoryProvider(HistoricalRecordsProvider):
    """History source with no records for any equipment."""

    async def get_records(self, asset_id: str, equipment_id: str) -> HistoricalRecords:
        return HistoricalRecords()


class FailingKnownIssueLookup(KnownIssueLookup):
    """Known-issue feed that is always down."""

    def __init__(self):
        self.calls = 0

    async def find_issue(self, asset_id: str, equipment_name: str) -> Optional[EquipmentIssue]:
        self.calls += 1
        raise ConnectionError("known-issue service unavailable")


# ─── Fixtures ────────────────────────────────────────────────────────────────
@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def oem_store():
    return OEMProfileStore()


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def orchestrator(oem_store, settings, fixed_clock):
    """Orchestrator with empty history so results depend only on the request."""
    return PMOrchestrator(
        oem_store=oem_store,
        history_provider=EmptyHistoryProvider(),
        settings=settings,
        clock=fixed_clock,
    )


@pytest.fixture
def wire_rope():
    return EquipmentInstance(
        id="sep450-wire-main",
        name="Main Hoist Wire Rope",
        type="wire_rope",
        cycle_count=12000,
        operating_hours=6200,
    )


@pytest.fixture
def main_engine():
    return EquipmentInstance(
        id="mirfa-engine-1",
        name="Main Engine #1",
        type="main_engine",
        cycle_count=30000,
        operating_hours=30000,
    )


@pytest.fixture
def make_request():
    def _make(*equipment, asset_id="SEP-450", environment_data=None):
        return AnalysisRequest(
            asset_type=AssetType.CRANE,
            asset_id=asset_id,
            asset_name=f"{asset_id} Jack-up Crane",
            equipment_list=list(equipment),
            environment_data=environment_data,
        )
    return _make


@pytest.fixture
def engine_issue():
    """Critical override for a main engine, reported by the external feed."""
    return EquipmentIssue(
        equipment_name="Main Engine",
        issue="Turbocharger surge under load",
        status="critical",
        health_score=20,
        pm_prediction=IssuePMPrediction(
            predicted_issue="Turbocharger bearing failure",
            priority=Priority.HIGH,
            warning_signals=["Abnormal turbo noise", "Boost pressure drop"],
            recommended_action="Replace turbocharger cartridge at next port call",
        ),
    )
