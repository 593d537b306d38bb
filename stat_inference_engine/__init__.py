"""Statistical Inference Engine: sampling, Bayesian two-class classification and interval estimation."""

from stat_inference_engine.classifier import BayesianClassifier, evaluate_classifiers
from stat_inference_engine.distributions.factory import generate, generate_result
from stat_inference_engine.estimation import IntervalEstimationCalculator, estimate_all
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    NormalParameters,
    UniformParameters,
)

__version__ = "0.1.0"

__all__ = [
    "BayesianClassifier",
    "BinomialParameters",
    "IntervalEstimationCalculator",
    "NormalParameters",
    "UniformParameters",
    "__version__",
    "estimate_all",
    "evaluate_classifiers",
    "generate",
    "generate_result",
]
