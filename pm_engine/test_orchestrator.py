"""
Integration tests for the end-to-end analysis.
"""

import asyncio
from datetime import timedelta

import pytest

from pm_engine.exceptions import UnknownEquipmentTypeError
from pm_engine.models.equipment import EnvironmentData, EquipmentInstance, Priority, SourceType
from pm_engine.pm_orchestrator import PMOrchestrator, analyze_equipment
from pm_engine.providers.known_issues import StaticKnownIssueLookup

from pm_engine.conftest import FIXED_NOW, EmptyHistoryProvider, FailingKnownIssueLookup


def _run(orchestrator, request):
    return asyncio.run(orchestrator.analyze(request))


class TestAnalysis:

    def test_empty_equipment_list(self, orchestrator, make_request):
        analysis = _run(orchestrator, make_request())
        assert analysis.overall_health_score == 100
        assert analysis.predictions == []
        assert analysis.reasoning_chain == []
        assert analysis.degradation_curve == []
        assert analysis.status == "complete"

    def test_wire_rope_at_twelve_thousand_cycles(self, orchestrator, make_request, wire_rope):
        analysis = _run(orchestrator, make_request(wire_rope))
        prediction = analysis.predictions[0]

        assert prediction.health_score == 50
        assert prediction.priority == Priority.HIGH
        assert prediction.remaining_life.unit == "cycles"
        assert prediction.remaining_life.value == 3000
        assert prediction.remaining_life.percent_remaining == 20
        assert prediction.predicted_issue == "Wire breakage due to fatigue"
        assert prediction.title == "Main Hoist Wire Rope - Maintenance Due Soon"
        assert prediction.cost_of_inaction.amount == 48000
        assert (prediction.estimated_downtime.min, prediction.estimated_downtime.max) == (16, 48)
        assert prediction.id == "PRED-SEP-450-sep450-wire-main"
        assert 0 <= prediction.confidence <= 100
        assert analysis.overall_health_score == 50

    def test_metadata(self, orchestrator, make_request, wire_rope, settings):
        analysis = _run(orchestrator, make_request(wire_rope))
        assert analysis.timestamp == FIXED_NOW
        assert analysis.next_analysis_recommended == FIXED_NOW + timedelta(hours=24)
        assert analysis.analysis_version == settings.analysis_version
        assert analysis.id.startswith("PMA-20250601-")
        assert len(analysis.sources_queried) == 8

    def test_reproducible_output(self, orchestrator, make_request, wire_rope, main_engine):
        request = make_request(wire_rope, main_engine)
        assert _run(orchestrator, request) == _run(orchestrator, request)

    def test_one_prediction_per_item(self, orchestrator, make_request, wire_rope, main_engine):
        analysis = _run(orchestrator, make_request(wire_rope, main_engine))
        assert len(analysis.predictions) == 2

    def test_overall_health_is_mean(self, orchestrator, make_request, main_engine):
        rope = EquipmentInstance(id="rope-aux", name="Aux Wire Rope", type="wire_rope", cycle_count=6000)
        analysis = _run(orchestrator, make_request(rope, main_engine))
        # 85 and 75
        assert analysis.overall_health_score == 80

    def test_reasoning_chain_in_input_order(self, orchestrator, make_request, wire_rope, main_engine):
        analysis = _run(orchestrator, make_request(wire_rope, main_engine))
        ids = [step.id for step in analysis.reasoning_chain]
        first_engine_step = ids.index("mirfa-engine-1-step-1")
        assert all(i.startswith("sep450-wire-main") for i in ids[:first_engine_step])
        assert all(i.startswith("mirfa-engine-1") for i in ids[first_engine_step:])

    def test_predictions_sorted_stably(self, orchestrator, make_request):
        healthy = EquipmentInstance(id="boom-1", name="Crane Boom", type="crane_boom", operating_hours=1000)
        worn_a = EquipmentInstance(id="rope-a", name="Port Wire Rope", type="wire_rope", cycle_count=14500)
        fair = EquipmentInstance(id="engine-2", name="Aux Engine", type="main_engine", operating_hours=30000)
        worn_b = EquipmentInstance(id="rope-b", name="Starboard Wire Rope", type="wire_rope", cycle_count=14800)

        analysis = _run(orchestrator, make_request(healthy, worn_a, fair, worn_b))
        assert [p.equipment_id for p in analysis.predictions] == ["rope-a", "rope-b", "engine-2", "boom-1"]
        assert [p.priority for p in analysis.predictions] == [
            Priority.CRITICAL, Priority.CRITICAL, Priority.MEDIUM, Priority.LOW,
        ]

    def test_degradation_curve_from_first_item(self, orchestrator, make_request, wire_rope, main_engine):
        analysis = _run(orchestrator, make_request(wire_rope, main_engine))
        assert len(analysis.degradation_curve) == 16
        assert analysis.degradation_curve[10].health_score == 50

    def test_contributions_from_first_item(self, orchestrator, make_request, wire_rope, main_engine):
        request = make_request(wire_rope, main_engine, environment_data=EnvironmentData(temperature=38))
        analysis = _run(orchestrator, request)
        assert [c.source.type for c in analysis.source_contributions] == [
            SourceType.LIVE_TELEMETRY,
            SourceType.OEM_SPECS,
            SourceType.WORK_HISTORY,
            SourceType.FLEET_DATA,
            SourceType.ENVIRONMENT,
            SourceType.INDUSTRY_STANDARDS,
        ]
        assert analysis.source_contributions[0].data_points[0].value == 50

    def test_reported_health_used_without_wear_inputs(self, orchestrator, make_request):
        generator = EquipmentInstance(id="gen-1", name="Generator #1", type="generator", current_health=64)
        analysis = _run(orchestrator, make_request(generator))
        assert analysis.predictions[0].health_score == 64

    def test_neutral_health_without_any_inputs(self, orchestrator, make_request):
        generator = EquipmentInstance(id="gen-1", name="Generator #1", type="generator")
        analysis = _run(orchestrator, make_request(generator))
        assert analysis.predictions[0].health_score == 100

    def test_high_probability_failure_mode_escalates(self, orchestrator, make_request):
        # Bearing failure 0.40 * 1.5 * 1.4 = 0.84 on a healthy motor
        motor = EquipmentInstance(
            id="hoist-1", name="Hoist Motor", type="hoist_motor",
            operating_hours=1000, vibration=4.2, temperature=80,
        )
        prediction = _run(orchestrator, make_request(motor)).predictions[0]
        assert prediction.health_score > 90
        assert prediction.priority == Priority.CRITICAL

    def test_unknown_equipment_type(self, orchestrator, make_request, wire_rope):
        tug = EquipmentInstance(id="tug-1", name="Tug", type="tugboat", operating_hours=100)
        with pytest.raises(UnknownEquipmentTypeError, match="tugboat"):
            _run(orchestrator, make_request(wire_rope, tug))


class TestKnownIssueOverride:

    @pytest.fixture
    def override_orchestrator(self, oem_store, settings, fixed_clock, engine_issue):
        return PMOrchestrator(
            oem_store=oem_store,
            history_provider=EmptyHistoryProvider(),
            known_issues=StaticKnownIssueLookup({"SEP-450": [engine_issue]}),
            settings=settings,
            clock=fixed_clock,
        )

    def test_override_health_wins(self, override_orchestrator, make_request, main_engine):
        # Wear curve alone gives 75 at 30000
        prediction = _run(override_orchestrator, make_request(main_engine)).predictions[0]
        assert prediction.health_score == 20

    def test_override_narrative_first(self, override_orchestrator, make_request, main_engine):
        analysis = _run(override_orchestrator, make_request(main_engine))
        expected = "Known issue detected: Turbocharger surge under load. Status: CRITICAL."
        assert analysis.predictions[0].reasoning_chain[0].text == expected
        assert analysis.reasoning_chain[0].text == expected

    def test_override_fields(self, override_orchestrator, make_request, main_engine):
        prediction = _run(override_orchestrator, make_request(main_engine)).predictions[0]
        # Override priority bypasses the ladder, which would say critical at health 20
        assert prediction.priority == Priority.HIGH
        assert prediction.predicted_issue == "Turbocharger bearing failure"
        assert prediction.recommended_action == "Replace turbocharger cartridge at next port call"
        assert prediction.confidence == 92
        failure_step = prediction.reasoning_chain[-1]
        assert failure_step.source_type == SourceType.INDUSTRY_STANDARDS
        assert failure_step.confidence == 85

    def test_override_only_applies_to_matching_item(self, override_orchestrator, make_request, main_engine):
        rope = EquipmentInstance(id="rope-aux", name="Aux Wire Rope", type="wire_rope", cycle_count=12000)
        analysis = _run(override_orchestrator, make_request(rope, main_engine))
        rope = next(p for p in analysis.predictions if p.equipment_id == "rope-aux")
        assert rope.health_score == 50
        assert not rope.reasoning_chain[0].text.startswith("Known issue")

    def test_override_without_health_uses_wear(self, oem_store, settings, fixed_clock, make_request,
                                               main_engine, engine_issue):
        issue = engine_issue.model_copy(update={"health_score": None, "status": "warning"})
        orchestrator = PMOrchestrator(
            oem_store=oem_store,
            history_provider=EmptyHistoryProvider(),
            known_issues=StaticKnownIssueLookup({"SEP-450": [issue]}),
            settings=settings,
            clock=fixed_clock,
        )
        prediction = _run(orchestrator, make_request(main_engine)).predictions[0]
        assert prediction.health_score == 75
        assert prediction.reasoning_chain[-1].confidence == 65

    def test_lookup_failure_falls_back(self, oem_store, settings, fixed_clock, make_request, wire_rope, caplog):
        lookup = FailingKnownIssueLookup()
        orchestrator = PMOrchestrator(
            oem_store=oem_store,
            history_provider=EmptyHistoryProvider(),
            known_issues=lookup,
            settings=settings,
            clock=fixed_clock,
        )
        analysis = _run(orchestrator, make_request(wire_rope))
        assert lookup.calls == 1
        assert analysis.predictions[0].health_score == 50
        assert "Known-issue lookup failed" in caplog.text


class TestSyncWrapper:

    def test_analyze_equipment(self, make_request, wire_rope, settings, fixed_clock):
        analysis = analyze_equipment(make_request(wire_rope), settings=settings, clock=fixed_clock)
        assert analysis.predictions[0].health_score == 50
        # Seeded history adds inspection and oil contributions
        source_types = [c.source.type for c in analysis.source_contributions]
        assert SourceType.INSPECTION_RECORDS in source_types
        assert SourceType.OIL_ANALYSIS in source_types
