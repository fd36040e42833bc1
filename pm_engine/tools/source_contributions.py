"""
Source Contribution Aggregator

Summarizes what each available evidence source contributed to an
equipment item's analysis, with a fixed relevance score per source kind.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from pm_engine.models.analysis import DataPoint, DataSource, FailureModePrediction, SourceContribution
from pm_engine.models.equipment import EnvironmentData, EquipmentInstance, EquipmentProfile, SourceType
from pm_engine.models.history import FleetPattern, HistoricalRecords, InspectionCondition

logger = logging.getLogger(__name__)

# (id, type, name, description, age in days, data quality, icon)
_SOURCE_CATALOG = [
    ("src-telemetry", SourceType.LIVE_TELEMETRY, "Live Sensor Telemetry",
     "Real-time data from equipment sensors", 0, 95, "Activity"),
    ("src-oem", SourceType.OEM_SPECS, "OEM Specifications",
     "Manufacturer maintenance intervals and wear curves", 30, 100, "FileText"),
    ("src-history", SourceType.WORK_HISTORY, "Work Order History",
     "Historical maintenance and repair records", 2, 88, "ClipboardList"),
    ("src-fleet", SourceType.FLEET_DATA, "Fleet Intelligence",
     "Similar equipment patterns across the fleet", 7, 82, "Ship"),
    ("src-environment", SourceType.ENVIRONMENT, "Operating Environment",
     "Weather, sea state, and operational conditions", 0, 90, "Cloud"),
    ("src-inspection", SourceType.INSPECTION_RECORDS, "Inspection Records",
     "Visual and NDT inspection findings", 14, 85, "Eye"),
    ("src-oil", SourceType.OIL_ANALYSIS, "Oil Analysis Reports",
     "Lubricant condition and wear debris analysis", 21, 92, "Droplets"),
    ("src-industry", SourceType.INDUSTRY_STANDARDS, "Industry Standards",
     "DNV, ABS, and industry best practices", 90, 100, "BookOpen"),
]

RELEVANCE_SCORES: Dict[SourceType, float] = {
    SourceType.LIVE_TELEMETRY: 95,
    SourceType.OEM_SPECS: 100,
    SourceType.WORK_HISTORY: 88,
    SourceType.FLEET_DATA: 82,
    SourceType.ENVIRONMENT: 75,
    SourceType.INSPECTION_RECORDS: 85,
    SourceType.OIL_ANALYSIS: 80,
    SourceType.INDUSTRY_STANDARDS: 70,
}


def build_data_sources(now: datetime) -> List[DataSource]:
    """The eight source descriptors, with last-updated times relative to now."""
    return [
        DataSource(
            id=source_id,
            type=source_type,
            name=name,
            description=description,
            last_updated=now - timedelta(days=age_days),
            data_quality=quality,
            is_available=True,
            icon_name=icon,
        )
        for source_id, source_type, name, description, age_days, quality, icon in _SOURCE_CATALOG
    ]


class SourceContributionAggregator:
    """
    Emits one SourceContribution per available source.

    Telemetry, OEM specs and work history are always present; the other
    sources contribute only when they returned data for the item.
    """

    def __init__(self, data_sources: List[DataSource]):
        self._sources = {s.type: s for s in data_sources}

    def _contribution(
        self,
        source_type: SourceType,
        contribution: str,
        data_points: List[DataPoint]
    ) -> SourceContribution:
        return SourceContribution(
            source=self._sources[source_type],
            contribution=contribution,
            relevance_score=RELEVANCE_SCORES[source_type],
            data_points=data_points,
        )

    def aggregate(
        self,
        equipment: EquipmentInstance,
        health: float,
        profile: EquipmentProfile,
        records: HistoricalRecords,
        fleet_patterns: List[FleetPattern],
        environment: Optional[EnvironmentData] = None,
        failure_mode: Optional[FailureModePrediction] = None
    ) -> List[SourceContribution]:
        contributions = []

        contributions.append(self._contribution(
            SourceType.LIVE_TELEMETRY,
            "Real-time health score, vibration, and temperature readings",
            [
                DataPoint(label="Health Score", value=round(health, 1), unit="%"),
                DataPoint(label="Vibration", value=equipment.vibration or 0, unit="mm/s"),
                DataPoint(label="Temperature", value=equipment.temperature or 0, unit="°C"),
                DataPoint(label="Operating Hours", value=equipment.operating_hours or 0, unit="h"),
            ],
        ))

        specs = profile.specs
        contributions.append(self._contribution(
            SourceType.OEM_SPECS,
            f"{profile.manufacturer} {profile.model} maintenance specifications and wear curve",
            [
                DataPoint(label="Max Hours", value=specs.max_operating_hours or "N/A"),
                DataPoint(label="PM Interval", value=specs.maintenance_interval_hours or "N/A", unit="h"),
                DataPoint(label="MTBF", value=specs.mtbf or "N/A", unit="h"),
            ],
        ))

        cm_count = len(records.corrective())
        pm_count = len(records.preventive())
        total = len(records.work_orders)
        contributions.append(self._contribution(
            SourceType.WORK_HISTORY,
            f"{total} historical records analyzed ({cm_count} CM, {pm_count} PM)",
            [
                DataPoint(label="Total Records", value=total),
                DataPoint(label="Corrective", value=cm_count),
                DataPoint(label="Preventive", value=pm_count),
            ],
        ))

        if fleet_patterns:
            occurrences = sum(p.occurrences for p in fleet_patterns)
            assets = {a for p in fleet_patterns for a in p.affected_assets}
            contributions.append(self._contribution(
                SourceType.FLEET_DATA,
                f"Cross-referenced {len(fleet_patterns)} fleet patterns covering {occurrences} "
                f"similar failures on {len(assets)} assets",
                [
                    DataPoint(label="Patterns", value=len(fleet_patterns)),
                    DataPoint(label="Occurrences", value=occurrences),
                    DataPoint(label="Affected Assets", value=len(assets)),
                ],
            ))

        if environment is not None:
            env_points = [
                DataPoint(label=label, value=value, unit=unit)
                for label, value, unit in (
                    ("Ambient Temperature", environment.temperature, "°C"),
                    ("Humidity", environment.humidity, "%"),
                    ("Sea State", environment.sea_state, None),
                    ("Wind Speed", environment.wind_speed, "kn"),
                )
                if value is not None
            ]
            if env_points:
                contributions.append(self._contribution(
                    SourceType.ENVIRONMENT,
                    "Operating environment factors: " + ", ".join(p.label.lower() for p in env_points),
                    env_points,
                ))

        if records.inspections:
            latest = records.inspections[0]
            poor = sum(
                1 for r in records.inspections
                if r.condition in (InspectionCondition.POOR, InspectionCondition.CRITICAL)
            )
            contributions.append(self._contribution(
                SourceType.INSPECTION_RECORDS,
                f"{len(records.inspections)} inspections reviewed - latest condition: {latest.condition.value}",
                [
                    DataPoint(label="Inspections", value=len(records.inspections)),
                    DataPoint(label="Latest Condition", value=latest.condition.value),
                    DataPoint(label="Poor or Worse", value=poor),
                ],
            ))

        if records.oil_analyses:
            latest_oil = records.oil_analyses[0]
            warnings = sum(1 for r in latest_oil.results if r.status != "normal")
            contributions.append(self._contribution(
                SourceType.OIL_ANALYSIS,
                f"{len(records.oil_analyses)} oil samples analyzed - latest: {latest_oil.overall_condition}",
                [
                    DataPoint(label="Samples", value=len(records.oil_analyses)),
                    DataPoint(label="Latest Condition", value=latest_oil.overall_condition),
                    DataPoint(label="Parameters Flagged", value=warnings),
                ],
            ))

        if failure_mode is not None:
            contributions.append(self._contribution(
                SourceType.INDUSTRY_STANDARDS,
                f'Failure mode "{failure_mode.mode}" assessed against industry reliability practice',
                [
                    DataPoint(label="Failure Probability", value=round(failure_mode.probability * 100), unit="%"),
                    DataPoint(label="Warning Signals", value=len(failure_mode.warning_signals)),
                ],
            ))

        logger.debug(f"{equipment.id}: {len(contributions)} source contributions")
        return contributions
