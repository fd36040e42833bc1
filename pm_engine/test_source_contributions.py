"""
Unit tests for source descriptors and contribution aggregation.
"""

import asyncio
from datetime import timedelta

import pytest

from pm_engine.models.analysis import FailureModePrediction
from pm_engine.models.equipment import EnvironmentData, SourceType
from pm_engine.models.history import HistoricalRecords
from pm_engine.providers.fleet_catalog import StaticFleetPatternCatalog
from pm_engine.providers.seeded_history import SeededHistoryProvider
from pm_engine.tools.source_contributions import (
    RELEVANCE_SCORES,
    SourceContributionAggregator,
    build_data_sources,
)

from pm_engine.conftest import FIXED_NOW


@pytest.fixture
def aggregator():
    return SourceContributionAggregator(build_data_sources(FIXED_NOW))


def test_data_source_catalog():
    sources = build_data_sources(FIXED_NOW)
    assert len(sources) == 8
    assert len({s.type for s in sources}) == 8
    oem = next(s for s in sources if s.type == SourceType.OEM_SPECS)
    assert oem.last_updated == FIXED_NOW - timedelta(days=30)
    assert oem.data_quality == 100


def test_minimal_contributions(aggregator, oem_store, wire_rope):
    contributions = aggregator.aggregate(
        wire_rope, 50, oem_store.get_profile("wire_rope"), HistoricalRecords(), [],
    )
    assert [c.source.type for c in contributions] == [
        SourceType.LIVE_TELEMETRY, SourceType.OEM_SPECS, SourceType.WORK_HISTORY,
    ]
    assert contributions[2].contribution == "0 historical records analyzed (0 CM, 0 PM)"


def test_all_sources_contribute(aggregator, oem_store, wire_rope, fixed_clock):
    records = asyncio.run(SeededHistoryProvider(clock=fixed_clock).get_records("SEP-450", wire_rope.id))
    patterns = asyncio.run(StaticFleetPatternCatalog().get_patterns("wire_rope"))
    contributions = aggregator.aggregate(
        wire_rope, 50, oem_store.get_profile("wire_rope"), records, patterns,
        environment=EnvironmentData(temperature=38, humidity=70),
        failure_mode=FailureModePrediction(mode="Wire breakage due to fatigue", probability=0.45),
    )
    assert [c.source.type for c in contributions] == list(SourceType)
    for c in contributions:
        assert c.relevance_score == RELEVANCE_SCORES[c.source.type]


def test_empty_environment_is_skipped(aggregator, oem_store, wire_rope):
    contributions = aggregator.aggregate(
        wire_rope, 50, oem_store.get_profile("wire_rope"), HistoricalRecords(), [],
        environment=EnvironmentData(),
    )
    assert SourceType.ENVIRONMENT not in [c.source.type for c in contributions]


def test_telemetry_data_points(aggregator, oem_store, wire_rope):
    telemetry = aggregator.aggregate(
        wire_rope, 50, oem_store.get_profile("wire_rope"), HistoricalRecords(), [],
    )[0]
    values = {p.label: p.value for p in telemetry.data_points}
    assert values["Health Score"] == 50
    assert values["Vibration"] == 0
    assert values["Operating Hours"] == 6200
