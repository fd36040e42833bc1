"""
Seeded Historical Records Provider

Generates reproducible pseudo-history (work orders, inspections, oil
analyses) seeded from the asset and equipment identifiers. For demos and
tests only; production deployments plug a database-backed
HistoricalRecordsProvider in its place.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from pm_engine.models.history import (
    HistoricalRecords,
    InspectionCondition,
    InspectionRecord,
    OilAnalysis,
    OilAnalysisResult,
    WorkOrder,
    WorkOrderType,
)
from pm_engine.config import utc_now
from pm_engine.providers.base import HistoricalRecordsProvider

logger = logging.getLogger(__name__)

WORK_ORDER_ISSUES: Dict[str, Dict[str, List[str]]] = {
    "wire_rope": {
        "pm": ["Scheduled wire rope lubrication", "Visual inspection - no defects found",
               "NDT inspection completed", "End fitting inspection", "Drum alignment check"],
        "cm": ["Wire breakage detected - partial replacement", "Kinking observed near sheave",
               "Corrosion treatment applied", "Emergency replacement due to wear", "Bird-caging repair"],
    },
    "hoist_motor": {
        "pm": ["Motor bearing regreasing", "Vibration analysis - within limits",
               "Insulation resistance test passed", "Cooling system cleaning", "Alignment verification"],
        "cm": ["Bearing replacement - excessive vibration", "Winding repair - hot spot detected",
               "Shaft seal replacement - oil leakage", "Motor overheating investigation",
               "Emergency bearing replacement"],
    },
    "main_engine": {
        "pm": ["Oil and filter change completed", "Valve clearance adjustment", "Turbocharger inspection",
               "Injector timing check", "Cooling system flush"],
        "cm": ["Turbocharger bearing replacement", "Injector replacement - poor atomization",
               "Coolant leak repair", "Governor adjustment - speed hunting",
               "Emergency cylinder liner replacement"],
    },
    "pump_system": {
        "pm": ["Mechanical seal inspection", "Vibration monitoring completed", "Impeller clearance check",
               "Bearing lubrication", "Alignment verification"],
        "cm": ["Mechanical seal replacement - leakage", "Impeller replacement - cavitation damage",
               "Bearing replacement - high vibration", "Shaft sleeve replacement", "Emergency pump overhaul"],
    },
    "hydraulic_system": {
        "pm": ["Hydraulic oil analysis completed", "Filter replacement", "Hose inspection - no defects",
               "Pressure test completed", "Valve calibration"],
        "cm": ["Hose replacement - external damage", "Pump repair - internal wear", "Valve replacement - sticking",
               "Oil contamination flush", "Cylinder seal replacement"],
    },
    "generator": {
        "pm": ["Generator oil service completed", "Insulation testing passed", "AVR calibration",
               "Bearing inspection", "Load bank test completed"],
        "cm": ["AVR replacement - voltage instability", "Bearing replacement", "Exciter repair",
               "Cooling fan motor replacement", "Stator winding repair"],
    },
    "crane_boom": {
        "pm": ["Structural inspection completed", "Pin and bushing greased", "NDT inspection - no cracks",
               "Paint touch-up", "Hydraulic cylinder inspection"],
        "cm": ["Pin replacement - excessive wear", "Crack repair - weld remediation", "Bushing replacement",
               "Cylinder seal replacement", "Corrosion treatment"],
    },
    "slew_bearing": {
        "pm": ["Slew bearing greased", "Bolt torque verification", "Backlash measurement - within spec",
               "Seal condition check", "Gear tooth inspection"],
        "cm": ["Seal replacement - grease leakage", "Bolt re-torquing - found loose", "Gear wear investigation",
               "Bearing noise investigation", "Emergency seal repair"],
    },
}

# Keyword -> equipment type, checked in order against the equipment id
EQUIPMENT_ID_KEYWORDS = [
    (("wire",), "wire_rope"),
    (("hoist", "motor"), "hoist_motor"),
    (("engine",), "main_engine"),
    (("pump",), "pump_system"),
    (("hydraulic",), "hydraulic_system"),
    (("generator", "gen"), "generator"),
    (("boom",), "crane_boom"),
    (("slew",), "slew_bearing"),
]

INSPECTORS = ["Ahmed Hassan", "Mohammed Al-Rashid", "Khalid Omar", "Saeed Al-Mansoori"]

INSPECTION_ACTIONS = [
    "Schedule maintenance within 7 days",
    "Order replacement parts",
    "Increase inspection frequency",
    "Consult OEM for guidance",
    "Coordinate with operations for downtime",
]

OIL_RECOMMENDATIONS = {
    "critical": "Immediate oil change recommended. Investigate source of contamination.",
    "marginal": "Schedule oil change within next 500 operating hours. Monitor wear metals.",
    "good": "Oil condition acceptable. Continue normal monitoring.",
}


def infer_equipment_type(equipment_id: str) -> str:
    """Guess the equipment type from keywords in its id (main_engine if none match)."""
    equipment_id = equipment_id.lower()
    for keywords, equipment_type in EQUIPMENT_ID_KEYWORDS:
        if any(kw in equipment_id for kw in keywords):
            return equipment_type
    return "main_engine"


class SeededHistoryProvider(HistoricalRecordsProvider):
    """
    Deterministic pseudo-history keyed on (asset_id, equipment_id).

    The same identifiers and clock always produce the same records.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            clock: Returns "now" for back-dating records (defaults to UTC now)
        """
        self.clock = clock or utc_now

    async def get_records(self, asset_id: str, equipment_id: str) -> HistoricalRecords:
        now = self.clock()
        records = HistoricalRecords(
            work_orders=self.generate_work_orders(asset_id, equipment_id, now),
            inspections=self.generate_inspections(asset_id, equipment_id, now),
            oil_analyses=self.generate_oil_analyses(asset_id, equipment_id, now),
        )
        logger.debug(
            f"Generated history for {asset_id}/{equipment_id}: "
            f"{len(records.work_orders)} WOs, {len(records.inspections)} inspections, "
            f"{len(records.oil_analyses)} oil analyses"
        )
        return records

    # ── Generators ──

    def generate_work_orders(self, asset_id: str, equipment_id: str, now: datetime) -> List[WorkOrder]:
        rng = random.Random(f"{asset_id}:{equipment_id}")
        issues = WORK_ORDER_ISSUES[infer_equipment_type(equipment_id)]

        work_orders = []
        for _ in range(rng.randint(4, 11)):
            is_pm = rng.random() > 0.35
            issue_list = issues["pm"] if is_pm else issues["cm"]
            date_created = now - timedelta(days=rng.randint(1, 180))
            work_orders.append(WorkOrder(
                id=f"WO-{now.year}-{rng.randint(100, 999)}",
                asset_id=asset_id,
                asset_name=asset_id,
                equipment_id=equipment_id,
                equipment_name=equipment_id,
                type=WorkOrderType.PREVENTIVE if is_pm else WorkOrderType.CORRECTIVE,
                issue=rng.choice(issue_list),
                resolution="Completed as scheduled" if is_pm
                else "Repair completed, equipment returned to service",
                date_created=date_created,
                date_completed=date_created + timedelta(hours=rng.randint(4, 51)),
                labor_hours=rng.randint(2, 17),
                parts_cost=rng.randint(500, 5499),
                downtime=rng.randint(2, 9) if is_pm else rng.randint(8, 31),
                was_unplanned=not is_pm,
            ))

        return sorted(work_orders, key=lambda wo: wo.date_created, reverse=True)

    def generate_inspections(self, asset_id: str, equipment_id: str, now: datetime) -> List[InspectionRecord]:
        rng = random.Random(f"{asset_id}:{equipment_id}:inspection")
        # Generated inspections never reach "critical"
        conditions = [InspectionCondition.GOOD, InspectionCondition.FAIR, InspectionCondition.POOR]

        records = []
        for _ in range(rng.randint(2, 5)):
            condition = rng.choice(conditions)
            records.append(InspectionRecord(
                id=f"INS-{now.year}-{rng.randint(100, 999)}",
                asset_id=asset_id,
                equipment_id=equipment_id,
                date=now - timedelta(days=rng.randint(14, 103)),
                inspector=rng.choice(INSPECTORS),
                findings=self._findings_for(condition, rng),
                condition=condition,
                photos_count=rng.randint(3, 14),
                recommended_actions=(
                    INSPECTION_ACTIONS[:rng.randint(1, 2)]
                    if condition != InspectionCondition.GOOD else []
                ),
            ))

        return sorted(records, key=lambda r: r.date, reverse=True)

    def generate_oil_analyses(self, asset_id: str, equipment_id: str, now: datetime) -> List[OilAnalysis]:
        rng = random.Random(f"{asset_id}:{equipment_id}:oil")

        def status(threshold: float) -> str:
            return "warning" if rng.random() > threshold else "normal"

        records = []
        for _ in range(rng.randint(1, 3)):
            roll = rng.random()
            overall = "critical" if roll > 0.95 else "marginal" if roll > 0.7 else "good"
            records.append(OilAnalysis(
                id=f"OIL-{now.year}-{rng.randint(100, 999)}",
                asset_id=asset_id,
                equipment_id=equipment_id,
                date=now - timedelta(days=rng.randint(21, 80)),
                lab="SGS Middle East",
                results=[
                    OilAnalysisResult(parameter="Viscosity @ 40°C", value=rng.randint(95, 114), unit="cSt",
                                      status=status(0.8), trend="stable"),
                    OilAnalysisResult(parameter="Iron (Fe)", value=rng.randint(10, 59), unit="ppm",
                                      status=status(0.7),
                                      trend="increasing" if rng.random() > 0.5 else "stable"),
                    OilAnalysisResult(parameter="Water Content", value=rng.randint(50, 549), unit="ppm",
                                      status=status(0.85), trend="stable"),
                    OilAnalysisResult(parameter="Particle Count ISO", value=rng.randint(16, 19), unit="/17/14",
                                      status=status(0.75),
                                      trend="increasing" if rng.random() > 0.6 else "stable"),
                    OilAnalysisResult(parameter="TAN", value=round(rng.uniform(0.5, 2.5), 1), unit="mgKOH/g",
                                      status=status(0.8), trend="increasing"),
                ],
                overall_condition=overall,
                recommendation=OIL_RECOMMENDATIONS[overall],
            ))

        return sorted(records, key=lambda r: r.date, reverse=True)

    @staticmethod
    def _findings_for(condition: InspectionCondition, rng: random.Random) -> List[str]:
        if condition == InspectionCondition.GOOD:
            findings = ["Equipment in good operating condition", "No visible defects or abnormalities"]
            if rng.random() > 0.5:
                findings.append("Minor cosmetic wear within acceptable limits")
        elif condition == InspectionCondition.FAIR:
            findings = ["Minor wear observed on contact surfaces", "Lubrication adequate but due for service"]
            if rng.random() > 0.5:
                findings.append("Small paint chips noted, no corrosion")
        elif condition == InspectionCondition.POOR:
            findings = ["Significant wear patterns detected", "Lubrication degraded, service overdue",
                        "Early signs of fatigue noted"]
            if rng.random() > 0.5:
                findings.append("Surface corrosion present")
        else:
            findings = ["Critical wear requiring immediate attention", "Visible defects affecting operation",
                        "Potential safety concern identified", "Recommend equipment stand-down pending repair"]
        return findings
