"""
Historical Record Models

Work orders, inspections, oil analyses, fleet patterns and the externally
supplied known-issue override. All are read-only for one analysis.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from pm_engine.models.equipment import Priority


class WorkOrderType(str, Enum):
    PREVENTIVE = "PM"
    CORRECTIVE = "CM"
    INSPECTION = "inspection"


class WorkOrder(BaseModel):
    id: str
    asset_id: str
    asset_name: str
    equipment_id: str
    equipment_name: str
    type: WorkOrderType
    issue: str
    resolution: Optional[str] = None
    date_created: datetime
    date_completed: Optional[datetime] = None
    labor_hours: float = Field(0, ge=0)
    parts_cost: float = Field(0, ge=0)
    downtime: float = Field(0, ge=0, description="Downtime in hours")
    was_unplanned: bool = False


class FailurePoint(BaseModel):
    value: float
    unit: str = Field(..., pattern="^(hours|cycles)$")


class FleetPattern(BaseModel):
    """Cross-fleet observation of how an equipment type tends to fail."""
    equipment_type: str
    pattern: str
    occurrences: int = Field(..., ge=0)
    average_failure_point: FailurePoint
    affected_assets: List[str] = Field(default_factory=list)
    recommended_intervention: str


class InspectionCondition(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class InspectionRecord(BaseModel):
    id: str
    asset_id: str
    equipment_id: str
    date: datetime
    inspector: str
    findings: List[str] = Field(default_factory=list)
    condition: InspectionCondition
    photos_count: int = Field(0, ge=0)
    recommended_actions: List[str] = Field(default_factory=list)


class OilAnalysisResult(BaseModel):
    parameter: str
    value: float
    unit: str
    status: str = Field(..., pattern="^(normal|warning|critical)$")
    trend: Optional[str] = Field(None, pattern="^(stable|increasing|decreasing)$")


class OilAnalysis(BaseModel):
    id: str
    asset_id: str
    equipment_id: str
    date: datetime
    lab: str
    results: List[OilAnalysisResult] = Field(default_factory=list)
    overall_condition: str = Field(..., pattern="^(good|marginal|critical)$")
    recommendation: str


class HistoricalRecords(BaseModel):
    """Everything the history provider knows about one (asset, equipment) pair."""
    work_orders: List[WorkOrder] = Field(default_factory=list)
    inspections: List[InspectionRecord] = Field(default_factory=list)
    oil_analyses: List[OilAnalysis] = Field(default_factory=list)

    def corrective(self) -> List[WorkOrder]:
        """Corrective work orders, most recent first."""
        return [wo for wo in self.work_orders if wo.type == WorkOrderType.CORRECTIVE]

    def preventive(self) -> List[WorkOrder]:
        return [wo for wo in self.work_orders if wo.type == WorkOrderType.PREVENTIVE]


class IssuePMPrediction(BaseModel):
    predicted_issue: str
    priority: Priority
    warning_signals: List[str] = Field(default_factory=list)
    recommended_action: str


class EquipmentIssue(BaseModel):
    """
    Authoritative status for one equipment item, supplied by an external feed.

    When present it overrides the engine's own health, failure mode and
    priority for that item.
    """
    equipment_name: str
    issue: str
    status: str = Field(..., description="critical, warning or normal")
    health_score: Optional[float] = Field(None, ge=0, le=100)
    pm_prediction: IssuePMPrediction
