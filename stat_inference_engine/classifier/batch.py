"""Parallel evaluation of independent classifier configurations."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Literal, Sequence

import numpy as np
from numpy.random import PCG64, Generator

from stat_inference_engine.classifier.bayes import BayesianClassifier
from stat_inference_engine.classifier.models import ClassificationResult, TheoreticalErrorInfo
from stat_inference_engine.exceptions import InvalidParameterError, StatInferenceError
from stat_inference_engine.schema.run_config import ErrorMode
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="classifier.batch")


@dataclass(slots=True)
class ClassifierEvaluation:
    """Outcome for a single classifier in a batch."""

    index: int
    status: Literal["success", "failed"]
    classifier: BayesianClassifier
    empirical: ClassificationResult | None = None
    theoretical: TheoreticalErrorInfo | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "status": self.status,
            "class1": self.classifier.class1.to_dict(),
            "class2": self.classifier.class2.to_dict(),
            "p1": self.classifier.p1,
            "p2": self.classifier.p2,
            "empirical": self.empirical.to_dict() if self.empirical else None,
            "theoretical": self.theoretical.to_dict() if self.theoretical else None,
            "error": self.error,
        }


def _clamp_workers(max_workers: int | None, jobs: int) -> int:
    cpu_count = os.cpu_count() or 1
    limit = min(6, cpu_count) if max_workers is None else max(1, max_workers)
    return max(1, min(limit, jobs))


def _evaluate(
    index: int,
    classifier: BayesianClassifier,
    seed_sequence: np.random.SeedSequence,
    samples_per_class: int,
    mode: ErrorMode,
) -> ClassifierEvaluation:
    try:
        rng = Generator(PCG64(seed_sequence))
        empirical = classifier.empirical_error(samples_per_class, rng=rng)
        theoretical = classifier.theoretical_error(mode) if classifier.supports_theoretical_analysis else None
        return ClassifierEvaluation(
            index=index,
            status="success",
            classifier=classifier,
            empirical=empirical,
            theoretical=theoretical,
        )
    except StatInferenceError as exc:
        log.warning("Classifier evaluation failed", extra={"index": index, "error": str(exc)})
        return ClassifierEvaluation(index=index, status="failed", classifier=classifier, error=str(exc))


def evaluate_classifiers(
    classifiers: Sequence[BayesianClassifier],
    *,
    samples_per_class: int = 1000,
    seed: int | None = 42,
    max_workers: int | None = None,
    mode: ErrorMode = "numeric",
) -> list[ClassifierEvaluation]:
    """Evaluate each classifier on its own child seed; results keep input order.

    Failures raised by the engine for one classifier are recorded on its
    result instead of aborting the batch.
    """

    if not classifiers:
        raise InvalidParameterError("At least one classifier is required")
    children = np.random.SeedSequence(seed).spawn(len(classifiers))
    workers = _clamp_workers(max_workers, len(classifiers))

    if workers == 1:
        results = [
            _evaluate(idx, clf, child, samples_per_class, mode)
            for idx, (clf, child) in enumerate(zip(classifiers, children))
        ]
    else:
        results = []
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_evaluate, idx, clf, child, samples_per_class, mode)
                for idx, (clf, child) in enumerate(zip(classifiers, children))
            ]
            for future in as_completed(futures):
                results.append(future.result())
        results.sort(key=lambda r: r.index)

    failed = sum(1 for r in results if r.status == "failed")
    log.info("Batch evaluation complete", extra={"sample_size": samples_per_class, "evaluated": len(results), "failed": failed})
    return results
