"""
Predictive Maintenance Engine

Fuses live telemetry, OEM specifications, maintenance history, fleet
patterns and known-issue overrides into prioritized, explainable
maintenance predictions for offshore cranes and vessels.
"""

from pm_engine.exceptions import ConfigurationError, PMEngineError, UnknownEquipmentTypeError
from pm_engine.pm_orchestrator import PMOrchestrator, analyze_equipment

__version__ = "2.1.0"

__all__ = [
    'PMOrchestrator', 'analyze_equipment',
    'PMEngineError', 'ConfigurationError', 'UnknownEquipmentTypeError',
]
