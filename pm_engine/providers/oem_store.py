"""
OEM Profile Store

Static manufacturer reference data per equipment type: rated specs, wear
curves, failure-mode catalog and maintenance task schedule.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional

from pm_engine.exceptions import UnknownEquipmentTypeError
from pm_engine.models.equipment import EquipmentProfile, EquipmentType
from pm_engine.models.analysis import MaintenanceTaskDue

logger = logging.getLogger(__name__)


def _fm(mode: str, probability: float, signals: List[str], mtbf: float) -> dict:
    return {"mode": mode, "probability": probability, "warning_signals": signals, "mtbf": mtbf}


def _task(task: str, interval: float, duration: float, parts: Optional[List[str]] = None) -> dict:
    return {
        "task": task,
        "interval_hours": interval,
        "estimated_duration": duration,
        "required_parts": parts or [],
    }


def _curve(*points) -> List[dict]:
    return [{"cycles": c, "health_percent": h} for c, h in points]


OEM_EQUIPMENT_PROFILES: Dict[str, dict] = {
    EquipmentType.WIRE_ROPE.value: {
        "id": "oem-wire-rope-001",
        "manufacturer": "Bridon-Bekaert",
        "model": "8-Strand IWRC",
        "specs": {
            "rated_capacity": 300,
            "rated_capacity_unit": "tons",
            "expected_life_cycles": 15000,
            "max_operating_hours": 8000,
        },
        "wear_curve": _curve(
            (0, 100), (3000, 95), (6000, 85), (9000, 70), (12000, 50), (14000, 30), (15000, 10)
        ),
        "failure_modes": [
            _fm("Wire breakage due to fatigue", 0.45,
                ["Visible broken wires", "Increased diameter variation", "Localized wear patterns"], 12000),
            _fm("Corrosion-induced degradation", 0.25,
                ["Surface rust", "Pitting", "Reduced lubrication retention"], 10000),
            _fm("Abrasion wear", 0.20,
                ["Flat spots on wires", "Reduced rope diameter", "Metallic debris"], 11000),
            _fm("Kinking or bird-caging", 0.10,
                ["Deformation visible", "Uneven load distribution", "Abnormal sounds"], 8000),
        ],
        "maintenance_tasks": [
            _task("Visual inspection", 50, 0.5),
            _task("Lubrication application", 100, 1, ["Wire rope lubricant 5L"]),
            _task("Detailed NDT inspection", 500, 4),
            _task("Full replacement", 8000, 24, ["Wire rope assembly", "End fittings", "Swage sleeves"]),
        ],
    },
    EquipmentType.HOIST_MOTOR.value: {
        "id": "oem-hoist-motor-001",
        "manufacturer": "ABB",
        "model": "AMI 450 Marine Motor",
        "specs": {
            "rated_capacity": 750,
            "rated_capacity_unit": "kW",
            "max_operating_hours": 40000,
            "maintenance_interval_hours": 4000,
            "max_temperature": 85,
            "max_vibration": 4.5,
            "mtbf": 35000,
        },
        "wear_curve": _curve((0, 100), (10000, 92), (20000, 80), (30000, 65), (35000, 45), (40000, 20)),
        "failure_modes": [
            _fm("Bearing failure", 0.40,
                ["Increased vibration", "Abnormal noise", "Temperature rise", "Grease discoloration"], 25000),
            _fm("Winding insulation breakdown", 0.25,
                ["Partial discharge activity", "Increased winding temperature", "Megger test degradation"], 35000),
            _fm("Shaft seal failure", 0.20,
                ["Oil leakage", "Contamination in housing", "Bearing temperature increase"], 20000),
            _fm("Cooling system degradation", 0.15,
                ["Fan noise", "Blocked vents", "Elevated operating temperature"], 30000),
        ],
        "maintenance_tasks": [
            _task("Vibration analysis", 500, 1),
            _task("Bearing regreasing", 2000, 2, ["High-temp bearing grease 1kg"]),
            _task("Insulation resistance test", 4000, 2),
            _task("Complete bearing replacement", 25000, 16,
                  ["SKF 6320 bearing x2", "Shaft seals", "Bearing housing gaskets"]),
        ],
    },
    EquipmentType.MAIN_ENGINE.value: {
        "id": "oem-main-engine-001",
        "manufacturer": "Caterpillar Marine",
        "model": "CAT 3516E",
        "specs": {
            "rated_capacity": 2525,
            "rated_capacity_unit": "kW",
            "max_operating_hours": 60000,
            "maintenance_interval_hours": 500,
            "max_temperature": 95,
            "mtbf": 50000,
        },
        "wear_curve": _curve((0, 100), (15000, 90), (30000, 75), (45000, 55), (55000, 35), (60000, 15)),
        "failure_modes": [
            _fm("Turbocharger failure", 0.25,
                ["Reduced boost pressure", "Abnormal turbo noise", "Increased exhaust temperature", "Black smoke"],
                20000),
            _fm("Injector degradation", 0.30,
                ["Poor fuel atomization", "Increased fuel consumption", "Rough running", "Misfires"], 15000),
            _fm("Cylinder liner wear", 0.20,
                ["Increased oil consumption", "Blow-by gases", "Compression loss"], 40000),
            _fm("Cooling system failure", 0.15,
                ["Coolant loss", "Temperature fluctuations", "Corrosion in coolant"], 25000),
            _fm("Governor/control system fault", 0.10,
                ["Speed hunting", "Load acceptance issues", "Sensor faults"], 35000),
        ],
        "maintenance_tasks": [
            _task("Oil and filter change", 500, 4, ["Engine oil 200L", "Oil filter x4", "Fuel filter x2"]),
            _task("Valve clearance adjustment", 2000, 8),
            _task("Injector overhaul", 8000, 16, ["Injector nozzles x16", "Injector seals kit"]),
            _task("Turbocharger service", 10000, 12, ["Turbo bearing kit", "Turbo seals"]),
            _task("Major overhaul", 30000, 120, ["Piston rings x16", "Bearings set", "Gasket set", "Liner sleeves"]),
        ],
    },
    EquipmentType.PUMP_SYSTEM.value: {
        "id": "oem-pump-001",
        "manufacturer": "Warman",
        "model": "WBH 500",
        "specs": {
            "rated_capacity": 5000,
            "rated_capacity_unit": "m³/hr",
            "max_operating_hours": 20000,
            "maintenance_interval_hours": 2000,
            "max_vibration": 6.0,
            "mtbf": 15000,
        },
        "wear_curve": _curve((0, 100), (5000, 88), (10000, 70), (15000, 48), (18000, 30), (20000, 10)),
        "failure_modes": [
            _fm("Impeller erosion", 0.35,
                ["Reduced flow rate", "Increased vibration", "Cavitation noise", "Pressure drop"], 8000),
            _fm("Mechanical seal failure", 0.30,
                ["Seal leakage", "Contamination in bearing housing", "Temperature rise at seal"], 6000),
            _fm("Bearing failure", 0.25,
                ["High vibration amplitude", "Bearing temperature", "Abnormal noise"], 12000),
            _fm("Shaft wear/damage", 0.10,
                ["Shaft runout", "Seal wear pattern", "Coupling misalignment"], 18000),
        ],
        "maintenance_tasks": [
            _task("Seal inspection", 500, 1),
            _task("Vibration monitoring", 250, 0.5),
            _task("Mechanical seal replacement", 4000, 8, ["Mechanical seal assembly", "O-rings kit"]),
            _task("Impeller replacement", 8000, 16, ["Impeller", "Wear plates", "Volute liner"]),
            _task("Complete pump overhaul", 16000, 48, ["Overhaul kit", "Bearings", "Shaft sleeves", "Impeller"]),
        ],
    },
    EquipmentType.HYDRAULIC_SYSTEM.value: {
        "id": "oem-hydraulic-001",
        "manufacturer": "Bosch Rexroth",
        "model": "A4VSO Series",
        "specs": {
            "rated_capacity": 500,
            "rated_capacity_unit": "bar",
            "max_operating_hours": 30000,
            "maintenance_interval_hours": 1000,
            "max_temperature": 70,
            "mtbf": 25000,
        },
        "wear_curve": _curve((0, 100), (7500, 90), (15000, 75), (22500, 55), (27500, 35), (30000, 15)),
        "failure_modes": [
            _fm("Internal pump wear", 0.30,
                ["Reduced system pressure", "Increased cycle time", "Pump noise change"], 20000),
            _fm("Oil contamination", 0.25,
                ["Particle count increase", "Filter bypass", "Valve sticking"], 15000),
            _fm("Seal/hose failure", 0.25,
                ["External leakage", "Hose bulging", "Fitting weepage"], 12000),
            _fm("Valve malfunction", 0.20,
                ["Erratic operation", "Slow response", "Overheating"], 22000),
        ],
        "maintenance_tasks": [
            _task("Oil analysis", 500, 0.5),
            _task("Filter replacement", 1000, 2, ["Hydraulic filter element x3"]),
            _task("Hose inspection", 2000, 4),
            _task("Complete oil change", 5000, 8, ["Hydraulic oil ISO VG46 500L"]),
            _task("Pump overhaul", 20000, 24, ["Pump repair kit", "Bearings", "Seals"]),
        ],
    },
    EquipmentType.GENERATOR.value: {
        "id": "oem-generator-001",
        "manufacturer": "Cummins Power Generation",
        "model": "QSK60-G",
        "specs": {
            "rated_capacity": 2000,
            "rated_capacity_unit": "kVA",
            "max_operating_hours": 50000,
            "maintenance_interval_hours": 500,
            "max_temperature": 90,
            "mtbf": 40000,
        },
        "wear_curve": _curve((0, 100), (12500, 92), (25000, 78), (37500, 58), (45000, 38), (50000, 15)),
        "failure_modes": [
            _fm("AVR/excitation failure", 0.25,
                ["Voltage instability", "Frequency hunting", "Excitation current anomaly"], 30000),
            _fm("Stator winding degradation", 0.20,
                ["Insulation resistance drop", "Partial discharge", "Hot spots"], 45000),
            _fm("Bearing wear", 0.30,
                ["Vibration increase", "Temperature rise", "Noise change"], 25000),
            _fm("Engine-generator coupling issue", 0.15,
                ["Alignment drift", "Vibration at 1x RPM", "Coupling wear"], 35000),
            _fm("Cooling fan/system failure", 0.10,
                ["Overheating", "Fan bearing noise", "Reduced airflow"], 20000),
        ],
        "maintenance_tasks": [
            _task("Routine inspection", 250, 1),
            _task("Oil and filter service", 500, 4, ["Engine oil 100L", "Oil filter x2", "Fuel filter"]),
            _task("Insulation testing", 4000, 4),
            _task("Bearing inspection/regreasing", 8000, 8, ["Generator bearing grease 2kg"]),
            _task("Major service", 20000, 48, ["Service kit", "Bearings", "Coupling elements"]),
        ],
    },
    EquipmentType.CRANE_BOOM.value: {
        "id": "oem-crane-boom-001",
        "manufacturer": "Huisman",
        "model": "Offshore Crane Boom",
        "specs": {
            "rated_capacity": 300,
            "rated_capacity_unit": "tons",
            "max_operating_hours": 100000,
            "maintenance_interval_hours": 2000,
            "mtbf": 80000,
        },
        "wear_curve": _curve((0, 100), (25000, 95), (50000, 85), (75000, 70), (90000, 50), (100000, 25)),
        "failure_modes": [
            _fm("Structural fatigue crack", 0.30,
                ["Crack detection in NDT", "Paint flaking at stress points", "Deformation"], 70000),
            _fm("Pin/bushing wear", 0.35,
                ["Play in joints", "Squeaking", "Uneven wear pattern"], 30000),
            _fm("Corrosion damage", 0.25,
                ["Surface rust", "Pitting", "Paint degradation"], 50000),
            _fm("Hydraulic cylinder failure", 0.10,
                ["Leakage", "Slow movement", "Rod scoring"], 25000),
        ],
        "maintenance_tasks": [
            _task("Visual inspection", 500, 2),
            _task("Pin and bushing greasing", 250, 4, ["Grease 10kg"]),
            _task("NDT inspection", 5000, 16),
            _task("Pin and bushing replacement", 25000, 48, ["Pin set", "Bushings", "Seals"]),
        ],
    },
    EquipmentType.SLEW_BEARING.value: {
        "id": "oem-slew-bearing-001",
        "manufacturer": "Rothe Erde",
        "model": "KD 800 Series",
        "specs": {
            "rated_capacity": 400,
            "rated_capacity_unit": "tons",
            "max_operating_hours": 50000,
            "maintenance_interval_hours": 500,
            "max_vibration": 3.0,
            "mtbf": 40000,
        },
        "wear_curve": _curve((0, 100), (12500, 90), (25000, 75), (37500, 55), (45000, 35), (50000, 10)),
        "failure_modes": [
            _fm("Raceway wear", 0.35,
                ["Increased rotational resistance", "Play in bearing", "Noise during slewing"], 35000),
            _fm("Seal degradation", 0.25,
                ["Grease leakage", "Contamination ingress", "Corrosion at seal area"], 20000),
            _fm("Gear tooth wear", 0.25,
                ["Backlash increase", "Gear noise", "Vibration during slewing"], 30000),
            _fm("Bolt loosening/failure", 0.15,
                ["Torque loss on bolts", "Movement at interface", "Fretting corrosion"], 25000),
        ],
        "maintenance_tasks": [
            _task("Greasing", 250, 2, ["Slew bearing grease 5kg"]),
            _task("Bolt torque check", 1000, 4),
            _task("Backlash measurement", 2000, 2),
            _task("Seal replacement", 15000, 24, ["Seal kit"]),
            _task("Full bearing replacement", 40000, 168, ["Slew bearing assembly", "Mounting hardware", "Seals"]),
        ],
    },
}


class OEMProfileStore:
    """
    In-memory OEM profile catalog.

    Profiles are validated once at construction and are read-only thereafter.
    A missing profile is a configuration error, never silently defaulted.
    """

    def __init__(self, profiles: Optional[Iterable[EquipmentProfile]] = None):
        """
        Initialize the store.

        Args:
            profiles: Profiles to serve (defaults to the bundled OEM catalog)
        """
        if profiles is None:
            profiles = [
                EquipmentProfile(equipment_type=equipment_type, **data)
                for equipment_type, data in OEM_EQUIPMENT_PROFILES.items()
            ]
        self._profiles: Dict[str, EquipmentProfile] = {p.equipment_type: p for p in profiles}
        logger.info(f"OEM profile store loaded with {len(self._profiles)} equipment types")

    def get_profile(self, equipment_type: str) -> EquipmentProfile:
        """
        Get the OEM profile for an equipment type.

        Raises:
            UnknownEquipmentTypeError: If no profile is registered for the type
        """
        key = equipment_type.value if isinstance(equipment_type, EquipmentType) else equipment_type
        profile = self._profiles.get(key)
        if profile is None:
            raise UnknownEquipmentTypeError(key)
        return profile

    def has_profile(self, equipment_type: str) -> bool:
        key = equipment_type.value if isinstance(equipment_type, EquipmentType) else equipment_type
        return key in self._profiles

    def list_types(self) -> List[str]:
        return list(self._profiles.keys())

    def next_maintenance_task(
        self,
        equipment_type: str,
        current_hours: float
    ) -> Optional[MaintenanceTaskDue]:
        """
        Find the OEM task that falls due soonest after current_hours.

        Each task recurs every interval_hours from zero; a task exactly on its
        boundary is treated as done and its next occurrence is a full interval away.

        Returns:
            MaintenanceTaskDue, or None if the type has no task schedule
        """
        profile = self.get_profile(equipment_type)
        nearest: Optional[MaintenanceTaskDue] = None

        for task in profile.maintenance_tasks:
            last_completed = math.floor(current_hours / task.interval_hours) * task.interval_hours
            due_in_hours = last_completed + task.interval_hours - current_hours
            if due_in_hours > 0 and (nearest is None or due_in_hours < nearest.due_in_hours):
                nearest = MaintenanceTaskDue(
                    task=task.task,
                    due_in_hours=due_in_hours,
                    estimated_duration=task.estimated_duration,
                    parts=list(task.required_parts),
                )

        return nearest
