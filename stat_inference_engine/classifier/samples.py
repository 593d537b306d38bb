"""Labelled test data for empirical error estimation."""

from __future__ import annotations

from typing import Optional

import numpy as np

from stat_inference_engine.classifier.models import TestSample
from stat_inference_engine.distributions.factory import generate, make_rng
from stat_inference_engine.distributions.normal import NormalMethod
from stat_inference_engine.distributions.validation_core import require_positive_count
from stat_inference_engine.interfaces.distribution import DistributionParameters


def generate_test_data(
    class1: DistributionParameters,
    class2: DistributionParameters,
    samples_per_class: int = 1000,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: int | None = None,
    normal_method: NormalMethod = "box_muller",
) -> list[TestSample]:
    """Draw ``samples_per_class`` values from each class and shuffle them together.

    The split is equal per class regardless of the priors. Class1 is drawn
    first, then class2, then the combined list is permuted with the same
    generator, so a fixed seed reproduces the exact sequence.
    """

    require_positive_count("samples_per_class", samples_per_class)
    rng = rng if rng is not None else make_rng(seed)

    first = generate(class1, samples_per_class, rng=rng, normal_method=normal_method)
    second = generate(class2, samples_per_class, rng=rng, normal_method=normal_method)
    labelled = [TestSample(value=float(v.value), true_class=True) for v in first]
    labelled += [TestSample(value=float(v.value), true_class=False) for v in second]

    order = rng.permutation(len(labelled))
    return [labelled[i] for i in order]
