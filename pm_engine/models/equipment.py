"""
Equipment Data Models

OEM reference profiles (per equipment type) and the per-asset equipment
instances submitted for analysis.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class EquipmentType(str, Enum):
    """Equipment types covered by the bundled OEM catalog."""
    WIRE_ROPE = "wire_rope"
    HOIST_MOTOR = "hoist_motor"
    MAIN_ENGINE = "main_engine"
    PUMP_SYSTEM = "pump_system"
    HYDRAULIC_SYSTEM = "hydraulic_system"
    GENERATOR = "generator"
    CRANE_BOOM = "crane_boom"
    SLEW_BEARING = "slew_bearing"


class AssetType(str, Enum):
    CRANE = "crane"
    VESSEL = "vessel"


class SourceType(str, Enum):
    """The eight evidence sources fused by the engine."""
    LIVE_TELEMETRY = "live_telemetry"
    OEM_SPECS = "oem_specs"
    WORK_HISTORY = "work_history"
    FLEET_DATA = "fleet_data"
    ENVIRONMENT = "environment"
    INSPECTION_RECORDS = "inspection_records"
    OIL_ANALYSIS = "oil_analysis"
    INDUSTRY_STANDARDS = "industry_standards"


class Priority(str, Enum):
    """Maintenance priority tier, most severe first."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: 0 is most severe."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class EquipmentSpecs(BaseModel):
    """OEM rated specifications. Any field may be absent for a given type."""
    rated_capacity: Optional[float] = Field(None, description="Rated capacity")
    rated_capacity_unit: Optional[str] = Field(None, description="Unit of rated capacity (tons, kW, bar, ...)")
    max_operating_hours: Optional[float] = Field(None, gt=0, description="Rated service life in operating hours")
    maintenance_interval_hours: Optional[float] = Field(None, gt=0, description="Nominal PM interval")
    expected_life_cycles: Optional[float] = Field(None, gt=0, description="Rated service life in load cycles")
    max_temperature: Optional[float] = Field(None, gt=0, description="Maximum operating temperature (°C)")
    max_vibration: Optional[float] = Field(None, gt=0, description="Maximum vibration velocity (mm/s)")
    mtbf: Optional[float] = Field(None, gt=0, description="Mean time between failures (hours)")


class WearPoint(BaseModel):
    cycles: float = Field(..., ge=0, description="Usage (cycles or hours) at this point")
    health_percent: float = Field(..., ge=0, le=100, description="Expected health at this usage")


class FailureMode(BaseModel):
    mode: str = Field(..., description="Failure mode name")
    probability: float = Field(..., ge=0.0, le=1.0, description="Base probability from OEM data")
    warning_signals: List[str] = Field(default_factory=list, description="Observable precursors")
    mtbf: Optional[float] = Field(None, description="Mode-specific MTBF (hours)")


class MaintenanceTask(BaseModel):
    task: str = Field(..., description="Task name")
    interval_hours: float = Field(..., gt=0, description="Recurrence interval in operating hours")
    estimated_duration: float = Field(..., ge=0, description="Task duration in hours")
    required_parts: List[str] = Field(default_factory=list, description="Parts consumed by the task")


class EquipmentProfile(BaseModel):
    """
    OEM reference profile for an equipment type.

    Loaded once and read-only thereafter. The wear curve must be sorted by
    ascending usage with non-increasing health.
    """
    id: str
    equipment_type: str
    manufacturer: str
    model: str
    specs: EquipmentSpecs = Field(default_factory=EquipmentSpecs)
    wear_curve: List[WearPoint] = Field(default_factory=list)
    failure_modes: List[FailureMode] = Field(default_factory=list)
    maintenance_tasks: List[MaintenanceTask] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("wear_curve")
    @classmethod
    def _check_wear_curve(cls, curve: List[WearPoint]) -> List[WearPoint]:
        for prev, point in zip(curve, curve[1:]):
            if point.cycles <= prev.cycles:
                raise ValueError("wear curve must be sorted by strictly ascending cycles")
            if point.health_percent > prev.health_percent:
                raise ValueError("wear curve health must be non-increasing")
        return curve


class EquipmentInstance(BaseModel):
    """A single equipment item on an asset, with its live readings."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    type: str = Field(..., description="Equipment type key in the OEM store", examples=["wire_rope"])
    current_health: Optional[float] = Field(None, ge=0, le=100, description="Health reported by telemetry")
    operating_hours: Optional[float] = Field(None, ge=0)
    cycle_count: Optional[float] = Field(None, ge=0)
    temperature: Optional[float] = Field(None, description="Operating temperature (°C)")
    vibration: Optional[float] = Field(None, ge=0, description="Vibration velocity (mm/s)")


class EnvironmentData(BaseModel):
    temperature: Optional[float] = Field(None, description="Ambient temperature (°C)")
    humidity: Optional[float] = Field(None, ge=0, le=100, description="Relative humidity (%)")
    sea_state: Optional[float] = Field(None, ge=0, description="Douglas sea state")
    wind_speed: Optional[float] = Field(None, ge=0, description="Wind speed (knots)")


class AnalysisRequest(BaseModel):
    """Input to the engine: one asset and its equipment list."""
    asset_type: AssetType
    asset_id: str = Field(..., min_length=1)
    asset_name: str
    equipment_list: List[EquipmentInstance] = Field(default_factory=list)
    environment_data: Optional[EnvironmentData] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "asset_type": "crane",
                "asset_id": "SEP-450",
                "asset_name": "SEP-450 Jack-up Crane",
                "equipment_list": [
                    {
                        "id": "sep450-wire-main",
                        "name": "Main Hoist Wire Rope",
                        "type": "wire_rope",
                        "cycle_count": 12000,
                        "operating_hours": 6200,
                    }
                ],
                "environment_data": {"temperature": 38, "humidity": 70},
            }
        }
    }
