# Data models package
from pm_engine.models.equipment import (
    AnalysisRequest,
    AssetType,
    EnvironmentData,
    EquipmentInstance,
    EquipmentProfile,
    EquipmentSpecs,
    EquipmentType,
    FailureMode,
    MaintenanceTask,
    Priority,
    SourceType,
    WearPoint,
)
from pm_engine.models.history import (
    EquipmentIssue,
    FleetPattern,
    HistoricalRecords,
    InspectionRecord,
    IssuePMPrediction,
    OilAnalysis,
    WorkOrder,
    WorkOrderType,
)
from pm_engine.models.analysis import (
    Analysis,
    DataPoint,
    DataSource,
    DegradationPoint,
    FailureModePrediction,
    MaintenanceTaskDue,
    Prediction,
    ReasoningStep,
    RemainingLife,
    SourceContribution,
)

__all__ = [
    'AnalysisRequest', 'AssetType', 'EnvironmentData', 'EquipmentInstance',
    'EquipmentProfile', 'EquipmentSpecs', 'EquipmentType', 'FailureMode',
    'MaintenanceTask', 'Priority', 'SourceType', 'WearPoint',
    'EquipmentIssue', 'FleetPattern', 'HistoricalRecords', 'InspectionRecord',
    'IssuePMPrediction', 'OilAnalysis', 'WorkOrder', 'WorkOrderType',
    'Analysis', 'DataPoint', 'DataSource', 'DegradationPoint',
    'FailureModePrediction', 'MaintenanceTaskDue', 'Prediction',
    'ReasoningStep', 'RemainingLife', 'SourceContribution',
]
