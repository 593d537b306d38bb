"""Uniform distribution generator."""

from __future__ import annotations

from typing import Optional

import numpy as np

from stat_inference_engine.distributions.models import GeneratedValue
from stat_inference_engine.distributions.validation_core import require_positive_count, validate_parameters
from stat_inference_engine.exceptions import InvalidParameterError
from stat_inference_engine.interfaces.distribution import (
    DistributionGenerator,
    DistributionParameters,
    UniformParameters,
)


class UniformGenerator(DistributionGenerator):
    """Inverse transform: F(x) = (x - a) / (b - a) = u  =>  x = a + u (b - a)."""

    kind = "uniform"

    def generate(
        self,
        parameters: DistributionParameters,
        sample_size: int,
        rng: Optional[np.random.Generator] = None,
    ) -> list[GeneratedValue]:
        if not isinstance(parameters, UniformParameters):
            raise InvalidParameterError("UniformGenerator expects UniformParameters")
        validate_parameters(parameters)
        require_positive_count("sample_size", sample_size)
        rng = rng if rng is not None else np.random.default_rng()

        a, b = float(parameters.a), float(parameters.b)
        width = b - a
        results = []
        for u in rng.random(sample_size):
            u = float(u)
            x = a + u * width
            results.append(
                GeneratedValue(
                    value=x,
                    random_u=u,
                    auxiliary_info={"a": a, "b": b, "calculation": f"x = {a} + {u} * ({width}) = {x}"},
                )
            )
        return results
