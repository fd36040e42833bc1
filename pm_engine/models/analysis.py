"""
Analysis Result Models

Defines the output structure of a predictive maintenance analysis:
per-equipment predictions, the source-attributed reasoning chain, source
contributions and the degradation curve.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from pm_engine.models.equipment import AssetType, Priority, SourceType


class DataSource(BaseModel):
    """Descriptor of one of the eight evidence sources."""
    id: str
    type: SourceType
    name: str
    description: str
    last_updated: datetime
    data_quality: float = Field(..., ge=0, le=100)
    is_available: bool = True
    icon_name: str


class DataPoint(BaseModel):
    label: str
    value: Union[float, int, str]
    unit: Optional[str] = None


class SourceContribution(BaseModel):
    """What one source contributed to the analysis, for explainability."""
    source: DataSource
    contribution: str = Field(..., description="Free-text summary of the contribution")
    relevance_score: float = Field(..., ge=0, le=100)
    data_points: List[DataPoint] = Field(default_factory=list)


class ReasoningStep(BaseModel):
    """Single source-attributed statement in the reasoning chain."""
    id: str
    text: str
    source_type: SourceType
    confidence: float = Field(..., ge=0, le=100, description="Confidence in this step (0-100)")
    is_key: bool = Field(False, description="Marks decision-critical evidence")


class DegradationPoint(BaseModel):
    timestamp: datetime
    health_score: float = Field(..., ge=0, le=100)
    is_projected: bool = False


class RemainingLife(BaseModel):
    value: float = Field(..., ge=0)
    unit: str = Field(..., pattern="^(hours|days|cycles|months)$")
    percent_remaining: float = Field(..., ge=0, le=100)


class FailureModePrediction(BaseModel):
    """Failure mode selected for an equipment item, with adjusted probability."""
    mode: str
    probability: float = Field(..., ge=0.0, le=1.0)
    warning_signals: List[str] = Field(default_factory=list)


class MaintenanceTaskDue(BaseModel):
    """The next OEM task falling due at the current operating hours."""
    task: str
    due_in_hours: float
    estimated_duration: float
    parts: List[str] = Field(default_factory=list)


class MoneyAmount(BaseModel):
    amount: float
    currency: str
    description: str


class CostRange(BaseModel):
    min: float
    max: float
    currency: str


class DowntimeRange(BaseModel):
    min: float
    max: float
    unit: str = Field("hours", pattern="^(hours|days)$")


class MaintenanceWindow(BaseModel):
    start: datetime
    end: datetime


class Prediction(BaseModel):
    """Maintenance recommendation for one equipment item."""
    id: str
    equipment_id: str
    equipment_name: str
    equipment_type: str
    asset_type: AssetType
    asset_id: str
    asset_name: str
    priority: Priority
    title: str
    description: str
    predicted_issue: str
    health_score: float = Field(..., ge=0, le=100)
    remaining_life: RemainingLife
    confidence: float = Field(..., ge=0, le=100)
    recommended_action: str
    alternative_actions: List[str] = Field(default_factory=list)
    cost_of_inaction: MoneyAmount
    estimated_repair_cost: CostRange
    estimated_downtime: DowntimeRange
    parts_required: List[str] = Field(default_factory=list)
    optimal_maintenance_window: Optional[MaintenanceWindow] = None
    reasoning_chain: List[ReasoningStep] = Field(default_factory=list)


class Analysis(BaseModel):
    """
    Final analysis for one asset.

    Predictions are sorted critical -> low, preserving input order within a
    tier. The reasoning chain concatenates every item's steps in input order.
    """
    id: str
    asset_type: AssetType
    asset_id: str
    asset_name: str
    timestamp: datetime
    status: str = "complete"
    sources_queried: List[DataSource] = Field(default_factory=list)
    source_contributions: List[SourceContribution] = Field(default_factory=list)
    reasoning_chain: List[ReasoningStep] = Field(default_factory=list)
    predictions: List[Prediction] = Field(default_factory=list)
    degradation_curve: List[DegradationPoint] = Field(default_factory=list)
    overall_health_score: float = Field(..., ge=0, le=100)
    next_analysis_recommended: datetime
    analysis_version: str
