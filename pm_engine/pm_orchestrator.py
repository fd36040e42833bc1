"""
Predictive Maintenance Orchestrator

Main entry point for predictive maintenance analysis. Fans out one task per
equipment item, fusing telemetry, OEM data, history, fleet patterns and any
known-issue override, then reduces the results into a single Analysis.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from pm_engine.config import EngineSettings, load_settings, utc_now
from pm_engine.models.analysis import (
    Analysis,
    FailureModePrediction,
    Prediction,
    ReasoningStep,
    SourceContribution,
)
from pm_engine.models.equipment import AnalysisRequest, EquipmentInstance, EquipmentProfile
from pm_engine.models.history import EquipmentIssue
from pm_engine.providers.base import (
    FleetPatternCatalog,
    HistoricalRecordsProvider,
    KnownIssueLookup,
    NullKnownIssueLookup,
)
from pm_engine.providers.fleet_catalog import StaticFleetPatternCatalog
from pm_engine.providers.oem_store import OEMProfileStore
from pm_engine.providers.seeded_history import SeededHistoryProvider
from pm_engine.tools.cost_estimator import CostEstimator
from pm_engine.tools.degradation_curve import DegradationCurveGenerator
from pm_engine.tools.failure_mode_predictor import FailureModePredictor
from pm_engine.tools.priority import PriorityClassifier
from pm_engine.tools.reasoning_chain import ReasoningChainBuilder
from pm_engine.tools.remaining_life import RemainingLifeCalculator
from pm_engine.tools.source_contributions import SourceContributionAggregator, build_data_sources
from pm_engine.tools.wear_estimator import WearEstimator

logger = logging.getLogger(__name__)

NEUTRAL_HEALTH = 100.0
KNOWN_ISSUE_CONFIDENCE = 92

# Failure probability implied by a known issue's status
KNOWN_ISSUE_PROBABILITY = {
    "critical": 0.85,
    "warning": 0.65,
}
KNOWN_ISSUE_DEFAULT_PROBABILITY = 0.45

_ID_NAMESPACE = uuid.UUID("6f1c2a4e-4d0b-4f7e-9a58-3c2d7b1e9f10")


@dataclass
class ItemAnalysis:
    """Per-equipment result, reduced into the Analysis after fan-in."""
    prediction: Prediction
    health: float
    reasoning_chain: List[ReasoningStep]
    source_contributions: List[SourceContribution]


class PMOrchestrator:
    """
    Main orchestrator for predictive maintenance analysis.

    Coordinates the per-equipment workflow:
    1. Resolve the OEM profile (missing profile fails the analysis)
    2. Fetch history, fleet patterns and any known-issue override
    3. Resolve health, failure mode, remaining life and priority
    4. Build the reasoning chain, source contributions and cost fields
    Then reduces all items into one Analysis.
    """

    def __init__(
        self,
        oem_store: Optional[OEMProfileStore] = None,
        history_provider: Optional[HistoricalRecordsProvider] = None,
        fleet_catalog: Optional[FleetPatternCatalog] = None,
        known_issues: Optional[KnownIssueLookup] = None,
        settings: Optional[EngineSettings] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            oem_store: OEM profile store (defaults to the bundled catalog)
            history_provider: Historical records source (defaults to seeded demo history)
            fleet_catalog: Fleet pattern source (defaults to the bundled catalog)
            known_issues: Known-issue override feed (defaults to none)
            settings: Engine settings (defaults to load_settings())
            clock: Returns "now"; inject a fixed clock for reproducible output
        """
        self.clock = clock or utc_now
        self.settings = settings or load_settings()
        self.oem_store = oem_store or OEMProfileStore()
        self.history_provider = history_provider or SeededHistoryProvider(clock=self.clock)
        self.fleet_catalog = fleet_catalog or StaticFleetPatternCatalog()
        self.known_issues = known_issues or NullKnownIssueLookup()

        self.wear_estimator = WearEstimator(self.oem_store)
        self.failure_predictor = FailureModePredictor(self.oem_store)
        self.life_calculator = RemainingLifeCalculator(self.oem_store)
        self.curve_generator = DegradationCurveGenerator(self.oem_store)
        self.cost_estimator = CostEstimator(currency=self.settings.currency)
        logger.info("PM Orchestrator initialized")

    async def analyze(self, request: AnalysisRequest) -> Analysis:
        """
        Main entry point: analyze every equipment item on an asset.

        Args:
            request: Asset identity and equipment list

        Returns:
            Analysis with predictions sorted critical first

        Raises:
            UnknownEquipmentTypeError: If any equipment type has no OEM profile
        """
        now = self.clock()
        logger.info(
            f"Starting PM analysis for {request.asset_name} ({request.asset_id}) "
            f"with {len(request.equipment_list)} equipment items"
        )
        self.validate_request(request)

        data_sources = build_data_sources(now)
        aggregator = SourceContributionAggregator(data_sources)

        tasks = [
            self._analyze_item(request, equipment, aggregator, now)
            for equipment in request.equipment_list
        ]
        results: List[ItemAnalysis] = list(await asyncio.gather(*tasks))

        # Reduce
        health_sum = sum(r.health for r in results)
        overall_health = round(health_sum / len(results)) if results else NEUTRAL_HEALTH
        reasoning_chain = [step for r in results for step in r.reasoning_chain]
        source_contributions = results[0].source_contributions if results else []
        predictions = PriorityClassifier.sort_by_priority([r.prediction for r in results])

        degradation_curve = []
        if results:
            primary = request.equipment_list[0]
            degradation_curve = self.curve_generator.generate(
                results[0].health, primary.operating_hours, primary.type, now
            )

        analysis = Analysis(
            id=self._generate_analysis_id(request.asset_id, now),
            asset_type=request.asset_type,
            asset_id=request.asset_id,
            asset_name=request.asset_name,
            timestamp=now,
            status="complete",
            sources_queried=data_sources,
            source_contributions=source_contributions,
            reasoning_chain=reasoning_chain,
            predictions=predictions,
            degradation_curve=degradation_curve,
            overall_health_score=overall_health,
            next_analysis_recommended=now + timedelta(hours=self.settings.next_analysis_hours),
            analysis_version=self.settings.analysis_version,
        )

        logger.info(
            f"PM analysis complete for {request.asset_id} (ID: {analysis.id}): "
            f"overall health {overall_health}%, "
            f"{sum(1 for p in predictions if p.priority == 'critical')} critical"
        )
        return analysis

    def validate_request(self, request: AnalysisRequest) -> bool:
        """
        Check that every equipment type has an OEM profile.

        Raises:
            UnknownEquipmentTypeError: On the first type without a profile
        """
        for equipment in request.equipment_list:
            if not self.oem_store.has_profile(equipment.type):
                logger.error(f"Equipment {equipment.id} has unknown type '{equipment.type}'")
                # Raises UnknownEquipmentTypeError
                self.oem_store.get_profile(equipment.type)
        return True

    # ── Per-item pipeline ──

    async def _analyze_item(
        self,
        request: AnalysisRequest,
        equipment: EquipmentInstance,
        aggregator: SourceContributionAggregator,
        now: datetime
    ) -> ItemAnalysis:
        profile = self.oem_store.get_profile(equipment.type)

        records, fleet_patterns, known_issue = await asyncio.gather(
            self.history_provider.get_records(request.asset_id, equipment.id),
            self.fleet_catalog.get_patterns(equipment.type),
            self._find_known_issue(request.asset_id, equipment.name),
        )

        health = self._resolve_health(equipment, profile, known_issue)
        failure_mode = self._resolve_failure_mode(equipment, known_issue)
        remaining_life = self.life_calculator.calculate(
            equipment.type, health, equipment.operating_hours or 0, equipment.cycle_count
        )

        if known_issue is not None:
            priority = known_issue.pm_prediction.priority
        else:
            high_probability = (
                failure_mode is not None
                and failure_mode.probability > self.settings.high_probability_threshold
            )
            priority = PriorityClassifier.classify(health, remaining_life.percent_remaining, high_probability)

        next_task = self.oem_store.next_maintenance_task(equipment.type, equipment.operating_hours or 0)

        chain = ReasoningChainBuilder(equipment, profile).build(
            health=health,
            records=records,
            fleet_patterns=fleet_patterns,
            failure_mode=failure_mode,
            next_task=next_task,
            known_issue=known_issue,
        )

        contributions = aggregator.aggregate(
            equipment, health, profile, records, fleet_patterns,
            environment=request.environment_data,
            failure_mode=failure_mode,
        )

        if known_issue is not None:
            confidence = KNOWN_ISSUE_CONFIDENCE
            predicted_issue = known_issue.pm_prediction.predicted_issue
        else:
            confidence = round(sum(s.confidence for s in chain) / len(chain))
            predicted_issue = failure_mode.mode if failure_mode else "General wear progression"

        logger.debug(
            f"{equipment.id}: health={health:.1f} priority={priority.value} "
            f"remaining={remaining_life.value} {remaining_life.unit} "
            f"override={'yes' if known_issue else 'no'}"
        )

        prediction = Prediction(
            id=f"PRED-{request.asset_id}-{equipment.id}",
            equipment_id=equipment.id,
            equipment_name=equipment.name,
            equipment_type=equipment.type,
            asset_type=request.asset_type,
            asset_id=request.asset_id,
            asset_name=request.asset_name,
            priority=priority,
            title=self.cost_estimator.title(equipment.name, priority),
            description=self.cost_estimator.description(failure_mode, known_issue),
            predicted_issue=predicted_issue,
            health_score=health,
            remaining_life=remaining_life,
            confidence=confidence,
            recommended_action=self.cost_estimator.recommended_action(next_task, remaining_life, known_issue),
            alternative_actions=self.cost_estimator.alternative_actions(),
            cost_of_inaction=self.cost_estimator.cost_of_inaction(profile, priority),
            estimated_repair_cost=self.cost_estimator.repair_cost(profile),
            estimated_downtime=self.cost_estimator.downtime(priority),
            parts_required=next_task.parts if next_task else [],
            optimal_maintenance_window=self.cost_estimator.maintenance_window(now),
            reasoning_chain=chain,
        )

        return ItemAnalysis(
            prediction=prediction,
            health=health,
            reasoning_chain=chain,
            source_contributions=contributions,
        )

    async def _find_known_issue(self, asset_id: str, equipment_name: str) -> Optional[EquipmentIssue]:
        """Look up an override; an unavailable feed means no override."""
        try:
            return await self.known_issues.find_issue(asset_id, equipment_name)
        except Exception as e:
            logger.warning(
                f"Known-issue lookup failed for {asset_id}/{equipment_name}, "
                f"falling back to engine heuristics: {e}"
            )
            return None

    def _resolve_health(
        self,
        equipment: EquipmentInstance,
        profile: EquipmentProfile,
        known_issue: Optional[EquipmentIssue]
    ) -> float:
        """Override, then wear-curve estimate, then reported health, then neutral."""
        if known_issue is not None and known_issue.health_score is not None:
            return known_issue.health_score

        usage = equipment.cycle_count if equipment.cycle_count is not None else equipment.operating_hours
        if profile.wear_curve and usage is not None:
            return self.wear_estimator.estimate_health(equipment.type, usage)

        if equipment.current_health is not None:
            return equipment.current_health

        return NEUTRAL_HEALTH

    def _resolve_failure_mode(
        self,
        equipment: EquipmentInstance,
        known_issue: Optional[EquipmentIssue]
    ) -> Optional[FailureModePrediction]:
        if known_issue is not None:
            return FailureModePrediction(
                mode=known_issue.pm_prediction.predicted_issue,
                probability=KNOWN_ISSUE_PROBABILITY.get(known_issue.status.lower(), KNOWN_ISSUE_DEFAULT_PROBABILITY),
                warning_signals=list(known_issue.pm_prediction.warning_signals),
            )
        return self.failure_predictor.predict(equipment.type, equipment.vibration, equipment.temperature)

    def _generate_analysis_id(self, asset_id: str, now: datetime) -> str:
        """Analysis ID, stable for a given asset and timestamp."""
        unique_id = str(uuid.uuid5(_ID_NAMESPACE, f"{asset_id}@{now.isoformat()}"))[:8]
        return f"PMA-{now.strftime('%Y%m%d')}-{unique_id}"


def analyze_equipment(request: AnalysisRequest, **kwargs) -> Analysis:
    """
    Synchronous convenience wrapper around PMOrchestrator.analyze.

    Keyword arguments are passed to the PMOrchestrator constructor.
    """
    orchestrator = PMOrchestrator(**kwargs)
    return asyncio.run(orchestrator.analyze(request))
