# Analysis tools package
from pm_engine.tools.wear_estimator import WearEstimator, interpolate_wear_curve
from pm_engine.tools.failure_mode_predictor import FailureModePredictor
from pm_engine.tools.remaining_life import RemainingLifeCalculator
from pm_engine.tools.priority import PriorityClassifier
from pm_engine.tools.reasoning_chain import ReasoningChainBuilder
from pm_engine.tools.source_contributions import SourceContributionAggregator, build_data_sources
from pm_engine.tools.degradation_curve import DegradationCurveGenerator
from pm_engine.tools.cost_estimator import CostEstimator

__all__ = [
    'WearEstimator', 'interpolate_wear_curve', 'FailureModePredictor', 'RemainingLifeCalculator',
    'PriorityClassifier', 'ReasoningChainBuilder', 'SourceContributionAggregator', 'build_data_sources',
    'DegradationCurveGenerator', 'CostEstimator',
]
