"""Two-class Bayesian classifier with theoretical and empirical error."""

from stat_inference_engine.classifier.batch import ClassifierEvaluation, evaluate_classifiers
from stat_inference_engine.classifier.bayes import BayesianClassifier
from stat_inference_engine.classifier.charts import density_curve
from stat_inference_engine.classifier.models import (
    AnalysisDomain,
    ClassificationResult,
    ClassifiedSample,
    ConfusionMatrix,
    DensityPoint,
    DetailedClassifiedSample,
    ErrorCalculationDetails,
    ErrorInterval,
    TestSample,
    TheoreticalErrorInfo,
)
from stat_inference_engine.classifier.samples import generate_test_data

__all__ = [
    "AnalysisDomain",
    "BayesianClassifier",
    "ClassificationResult",
    "ClassifiedSample",
    "ClassifierEvaluation",
    "ConfusionMatrix",
    "DensityPoint",
    "DetailedClassifiedSample",
    "ErrorCalculationDetails",
    "ErrorInterval",
    "TestSample",
    "TheoreticalErrorInfo",
    "density_curve",
    "evaluate_classifiers",
    "generate_test_data",
]
