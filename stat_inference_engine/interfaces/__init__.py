"""Shared interfaces.

- distribution.py: the closed set of distribution parameter variants
  (Binomial, Uniform, Normal), their tagged dict projection, and the
  DistributionGenerator base class implemented by the sampling generators.
"""

from stat_inference_engine.interfaces.distribution import (
    DISTRIBUTION_INFO,
    BinomialParameters,
    DistributionCategory,
    DistributionGenerator,
    DistributionInfo,
    DistributionKind,
    DistributionParameters,
    NormalParameters,
    UniformParameters,
    describe_parameters,
    parameters_from_dict,
)

__all__ = [
    "DISTRIBUTION_INFO",
    "BinomialParameters",
    "DistributionCategory",
    "DistributionGenerator",
    "DistributionInfo",
    "DistributionKind",
    "DistributionParameters",
    "NormalParameters",
    "UniformParameters",
    "describe_parameters",
    "parameters_from_dict",
]
