"""Normal distribution generator.

Two transforms are available:

``box_muller`` (default)
    z = sqrt(-2 ln(1 - u1)) * cos(2 pi u2), with u1, u2 ~ U[0, 1).
    ``1 - u1`` lies in (0, 1] so the logarithm is always finite. Only the cosine
    branch is used; each sample consumes exactly two draws and ``random_u`` is u1.

``clt12``
    z = (u1 + ... + u12) - 6, the central-limit approximation (mean 0,
    variance 1, support [-6, 6]). ``random_u`` is u1.

In both cases the sample is ``m + sigma * z``.
"""

from __future__ import annotations

import math
from typing import Literal, Optional

import numpy as np

from stat_inference_engine.distributions.models import GeneratedValue
from stat_inference_engine.distributions.validation_core import require_positive_count, validate_parameters
from stat_inference_engine.exceptions import InvalidParameterError
from stat_inference_engine.interfaces.distribution import (
    DistributionGenerator,
    DistributionParameters,
    NormalParameters,
)

NormalMethod = Literal["box_muller", "clt12"]
NORMAL_METHODS = ("box_muller", "clt12")


def box_muller(u1: float, u2: float) -> float:
    return math.sqrt(-2.0 * math.log(1.0 - u1)) * math.cos(2.0 * math.pi * u2)


class NormalGenerator(DistributionGenerator):
    kind = "normal"

    def __init__(self, method: NormalMethod = "box_muller") -> None:
        if method not in NORMAL_METHODS:
            raise InvalidParameterError(f"Unknown normal method: {method}")
        self.method = method

    def generate(
        self,
        parameters: DistributionParameters,
        sample_size: int,
        rng: Optional[np.random.Generator] = None,
    ) -> list[GeneratedValue]:
        if not isinstance(parameters, NormalParameters):
            raise InvalidParameterError("NormalGenerator expects NormalParameters")
        validate_parameters(parameters)
        require_positive_count("sample_size", sample_size)
        rng = rng if rng is not None else np.random.default_rng()

        m, sigma = float(parameters.m), float(parameters.sigma)
        results = []
        if self.method == "box_muller":
            draws = rng.random((sample_size, 2))
            for u1, u2 in draws:
                z = box_muller(float(u1), float(u2))
                results.append(
                    GeneratedValue(
                        value=m + sigma * z,
                        random_u=float(u1),
                        auxiliary_info={"m": m, "sigma": sigma, "standard_value": z, "u2": float(u2), "method": self.method},
                    )
                )
            return results

        draws = rng.random((sample_size, 12))
        for row in draws:
            z = float(row.sum()) - 6.0
            results.append(
                GeneratedValue(
                    value=m + sigma * z,
                    random_u=float(row[0]),
                    auxiliary_info={"m": m, "sigma": sigma, "standard_value": z, "method": self.method},
                )
            )
        return results
