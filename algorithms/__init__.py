from .math_tools import MathTools
from .date_tools import DateTools
from .volume_calculator import VolumeCalculator
from .trend_analyzer import RegressionResult, TrendAnalyzer
from .rep_max_estimator import RepMaxEstimator
from .weight_converter import WeightConverter

__all__ = [
    "MathTools",
    "DateTools",
    "VolumeCalculator",
    "RegressionResult",
    "TrendAnalyzer",
    "RepMaxEstimator",
    "WeightConverter",
]
