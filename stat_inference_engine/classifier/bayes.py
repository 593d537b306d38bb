"""Two-class Bayesian decision rule, its boundaries and its error rates."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence

import numpy as np

from stat_inference_engine.classifier.densities import density, support_bounds
from stat_inference_engine.classifier.integration import (
    SIMPSON_STEPS,
    integrate_closed_form,
    integrate_numeric,
)
from stat_inference_engine.classifier.models import (
    AnalysisDomain,
    ClassificationResult,
    ClassifiedSample,
    ConfusionMatrix,
    DetailedClassifiedSample,
    ErrorCalculationDetails,
    ErrorInterval,
    TestSample,
    TheoreticalErrorInfo,
)
from stat_inference_engine.classifier.samples import generate_test_data
from stat_inference_engine.distributions.normal import NormalMethod
from stat_inference_engine.distributions.validation_core import validate_parameters
from stat_inference_engine.exceptions import (
    InvalidParameterError,
    NumericDegenerateError,
    UnsupportedVariantError,
)
from stat_inference_engine.interfaces.distribution import (
    DistributionParameters,
    NormalParameters,
    UniformParameters,
)
from stat_inference_engine.schema.run_config import ERROR_MODES, ErrorMode
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="classifier")

PRIOR_TOLERANCE = 1e-9


@dataclass(frozen=True)
class BayesianClassifier:
    """Chooses class1 when ``p1 f1(x) >= p2 f2(x)``.

    Instances are immutable; ``copy_with`` returns a modified copy. Validity
    (priors summing to one, well-formed parameters) is checked by the
    analysis operations rather than at construction.
    """

    class1: DistributionParameters
    class2: DistributionParameters
    p1: float = 0.5
    p2: float = 0.5
    class1_name: str = "Class 1"
    class2_name: str = "Class 2"
    domain: AnalysisDomain = field(default_factory=AnalysisDomain)

    @classmethod
    def default(cls) -> "BayesianClassifier":
        return cls(class1=UniformParameters(a=3.0, b=5.0), class2=NormalParameters(m=5.0, sigma=1.0))

    def copy_with(self, **overrides: Any) -> "BayesianClassifier":
        return replace(self, **overrides)

    @property
    def is_valid(self) -> bool:
        if not (math.isfinite(self.p1) and math.isfinite(self.p2)):
            return False
        return self.p1 >= 0 and self.p2 >= 0 and abs(self.p1 + self.p2 - 1.0) <= PRIOR_TOLERANCE

    def validate(self) -> None:
        if not self.is_valid:
            raise InvalidParameterError(f"Priors must be non-negative and sum to 1, got p1={self.p1}, p2={self.p2}")
        validate_parameters(self.class1)
        validate_parameters(self.class2)

    @property
    def is_continuous(self) -> bool:
        return not (self.class1.is_discrete or self.class2.is_discrete)

    # decision rule

    def weighted_densities(self, x: float) -> tuple[float, float]:
        return self.p1 * density(self.class1, x), self.p2 * density(self.class2, x)

    def decision_function(self, x: float) -> float:
        d1, d2 = self.weighted_densities(x)
        return d1 - d2

    def classify(self, x: float) -> bool:
        """True when class1 is chosen; ties go to class1."""

        d1, d2 = self.weighted_densities(x)
        return d1 >= d2

    def classify_with_details(self, x: float, true_class: bool) -> DetailedClassifiedSample:
        d1, d2 = self.weighted_densities(x)
        total = d1 + d2
        return DetailedClassifiedSample(
            value=x,
            true_class=true_class,
            predicted_class=d1 >= d2,
            density1=d1,
            density2=d2,
            decision_boundary=d1 - d2,
            confidence=abs(d1 - d2) / total if total > 0 else 0.0,
        )

    # analysis domain and boundaries

    def _domain_bounds(self) -> tuple[float, float]:
        lo1, hi1 = support_bounds(self.class1)
        lo2, hi2 = support_bounds(self.class2)
        lower = max(min(lo1, lo2) - self.domain.padding, self.domain.lower_limit)
        upper = min(max(hi1, hi2) + self.domain.padding, self.domain.upper_limit)
        return lower, upper

    def analysis_domain(self) -> tuple[float, float]:
        lower, upper = self._domain_bounds()
        if not lower < upper:
            raise NumericDegenerateError(
                f"Analysis domain [{lower}, {upper}] is empty after clamping to "
                f"[{self.domain.lower_limit}, {self.domain.upper_limit}]"
            )
        return lower, upper

    @property
    def supports_theoretical_analysis(self) -> bool:
        lower, upper = self._domain_bounds()
        return self.is_continuous and lower < upper

    def _require_continuous(self, operation: str) -> None:
        if not self.is_continuous:
            raise UnsupportedVariantError(f"{operation} is only defined for continuous classes")

    def _refine(self, left: float, right: float) -> float:
        """Bisect a bracket whose ends classify differently.

        An end that never moves is the boundary itself (a support edge or a
        tie on the grid) and is returned unchanged. Exact zeros of ``g`` are
        ties, not crossings, so only a non-zero ``|g| < tolerance`` stops early.
        """

        left_decision = self.classify(left)
        left_moved = right_moved = False
        for _ in range(self.domain.bisection_iterations):
            mid = (left + right) / 2
            g = self.decision_function(mid)
            if g != 0.0 and abs(g) < self.domain.tolerance:
                return mid
            if (g >= 0) == left_decision:
                left, left_moved = mid, True
            else:
                right, right_moved = mid, True
        if left_moved and not right_moved:
            return right
        if right_moved and not left_moved:
            return left
        return (left + right) / 2

    def find_intersection_points(self) -> list[float]:
        """Points in the analysis domain where the decision changes, ascending.

        A fixed grid is scanned and every bracket where ``classify`` flips is
        refined by bisection. A boundary on a grid point (a support edge or an
        exact tie) is reported exactly. Touches that do not flip the decision
        are not reported.
        """

        self._require_continuous("Intersection search")
        self.validate()
        lower, upper = self.analysis_domain()
        steps = self.domain.steps

        points: list[float] = []
        prev_x = lower
        prev_decision = self.classify(lower)
        for i in range(1, steps + 1):
            x = lower + (upper - lower) * i / steps
            decision = self.classify(x)
            if decision != prev_decision:
                points.append(self._refine(prev_x, x))
            prev_x, prev_decision = x, decision

        log.debug("Intersection scan complete", extra={"points": len(points), "lower": lower, "upper": upper})
        return points

    # theoretical error

    def theoretical_error(self, mode: ErrorMode = "numeric") -> TheoreticalErrorInfo:
        """Bayes error over the analysis domain.

        The domain is split at the intersection points; on each piece the
        class not chosen at the midpoint contributes its weighted mass.
        """

        if mode not in ERROR_MODES:
            raise InvalidParameterError(f"Unknown error mode {mode!r}; expected one of {list(ERROR_MODES)}")
        self._require_continuous("Theoretical error")
        started = time.perf_counter()
        points = self.find_intersection_points()
        lower, upper = self.analysis_domain()
        bounds = [lower] + [p for p in points if lower < p < upper] + [upper]

        intervals: list[ErrorInterval] = []
        for start, end in zip(bounds, bounds[1:]):
            if self.classify((start + end) / 2):
                losing, prior, name = self.class2, self.p2, self.class2_name
            else:
                losing, prior, name = self.class1, self.p1, self.class1_name

            if mode == "numeric":
                error = integrate_numeric(losing, start, end, prior)
                formula = f"{prior:g} * integral f(x) dx over [{start:.4f}, {end:.4f}] (Simpson, {SIMPSON_STEPS} steps)"
            else:
                error = integrate_closed_form(losing, start, end, prior, mode=mode)
                source = "Laplace table" if mode == "table" else "erf"
                formula = f"{prior:g} * (F({end:.4f}) - F({start:.4f})) ({source})"

            intervals.append(
                ErrorInterval(
                    start=start,
                    end=end,
                    error=error,
                    losing_class_name=name,
                    details=ErrorCalculationDetails(losing_distribution=losing, prior=prior, formula=formula),
                )
            )

        total = sum(interval.error for interval in intervals)
        if not math.isfinite(total):
            raise NumericDegenerateError("Theoretical error is not finite")
        log.debug(
            "Theoretical error computed",
            extra={"mode": mode, "duration_ms": round((time.perf_counter() - started) * 1000, 3)},
        )
        return TheoreticalErrorInfo(total_error=total, error_intervals=intervals, intersection_points=points, mode=mode)

    # empirical error

    def error_rate_for_samples(self, samples: Sequence[TestSample], detailed: bool = False) -> ClassificationResult:
        if not samples:
            raise InvalidParameterError("At least one test sample is required")
        self.validate()

        classified: list[ClassifiedSample] = []
        for sample in samples:
            if detailed:
                classified.append(self.classify_with_details(sample.value, sample.true_class))
            else:
                classified.append(
                    ClassifiedSample(
                        value=sample.value,
                        true_class=sample.true_class,
                        predicted_class=self.classify(sample.value),
                    )
                )

        correct = sum(1 for item in classified if item.is_correct)
        total = len(classified)
        points = self.find_intersection_points() if self.supports_theoretical_analysis else []
        return ClassificationResult(
            error_rate=(total - correct) / total,
            correct_classifications=correct,
            total_samples=total,
            classified_samples=classified,
            intersection_points=points,
            confusion_matrix=ConfusionMatrix.from_samples(classified),
        )

    def empirical_error(
        self,
        samples_per_class: int = 1000,
        *,
        rng: Optional[np.random.Generator] = None,
        seed: int | None = None,
        detailed: bool = False,
        normal_method: NormalMethod = "box_muller",
    ) -> ClassificationResult:
        """Classify freshly drawn labelled data, ``samples_per_class`` per class."""

        self.validate()
        started = time.perf_counter()
        samples = generate_test_data(
            self.class1,
            self.class2,
            samples_per_class,
            rng=rng,
            seed=seed,
            normal_method=normal_method,
        )
        result = self.error_rate_for_samples(samples, detailed=detailed)
        log.info(
            "Empirical error computed",
            extra={
                "sample_size": result.total_samples,
                "error_rate": result.error_rate,
                "duration_ms": round((time.perf_counter() - started) * 1000, 3),
            },
        )
        return result
