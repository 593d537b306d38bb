"""Sampling generators turning uniform(0,1) draws into distribution samples.

The ``generate``/``generate_result`` entry points live in
``stat_inference_engine.distributions.factory``.
"""

from stat_inference_engine.distributions.models import GeneratedValue
from stat_inference_engine.distributions.binomial import BinomialGenerator
from stat_inference_engine.distributions.normal import NormalGenerator
from stat_inference_engine.distributions.uniform import UniformGenerator

__all__ = [
    "BinomialGenerator",
    "GeneratedValue",
    "NormalGenerator",
    "UniformGenerator",
]
