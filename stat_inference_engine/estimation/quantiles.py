"""Critical points of the standard normal, Student t and chi-squared laws.

Lookups go through literal tables first. Values between tabulated degrees
of freedom are interpolated (in ``1/df`` for t, linearly in ``df`` for
chi-squared); beyond the tables the normal quantile (t) or the
Wilson-Hilferty cube-root approximation (chi-squared) takes over. A
probability that is not a table column is delegated to ``scipy.stats``.
"""

from __future__ import annotations

import bisect
import math
from typing import Mapping, Optional, Sequence

from scipy import stats

from stat_inference_engine.exceptions import InvalidParameterError, NumericDegenerateError

# Two-sided critical values z_{1 - alpha/2} keyed by confidence level.
STANDARD_NORMAL_TWO_SIDED: dict[float, float] = {
    0.90: 1.6448536269514722,
    0.95: 1.959963984540054,
    0.99: 2.5758293035489004,
    0.999: 3.2905267314919255,
}

# Acklam's rational approximation of the inverse normal CDF.
_A = (
    -3.969683028665376e01,
    2.209460984245205e02,
    -2.759285104469687e02,
    1.383577518672690e02,
    -3.066479806614716e01,
    2.506628277459239e00,
)
_B = (
    -5.447609879822406e01,
    1.615858368580409e02,
    -1.556989798598866e02,
    6.680131188771972e01,
    -1.328068155288572e01,
)
_C = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e00,
    -2.549732539343734e00,
    4.374664141464968e00,
    2.938163982698783e00,
)
_D = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e00,
    3.754408661907416e00,
)
_P_LOW = 0.02425
_P_HIGH = 1 - _P_LOW

# One-sided upper probabilities P(T <= t).
T_PROBABILITIES = (0.90, 0.95, 0.975, 0.99, 0.995, 0.9995)
_T_ROWS: dict[int, tuple[float, ...]] = {
    1: (3.078, 6.314, 12.706, 31.821, 63.657, 636.619),
    2: (1.886, 2.920, 4.303, 6.965, 9.925, 31.599),
    3: (1.638, 2.353, 3.182, 4.541, 5.841, 12.924),
    4: (1.533, 2.132, 2.776, 3.747, 4.604, 8.610),
    5: (1.476, 2.015, 2.571, 3.365, 4.032, 6.869),
    6: (1.440, 1.943, 2.447, 3.143, 3.707, 5.959),
    7: (1.415, 1.895, 2.365, 2.998, 3.499, 5.408),
    8: (1.397, 1.860, 2.306, 2.896, 3.355, 5.041),
    9: (1.383, 1.833, 2.262, 2.821, 3.250, 4.781),
    10: (1.372, 1.812, 2.228, 2.764, 3.169, 4.587),
    11: (1.363, 1.796, 2.201, 2.718, 3.106, 4.437),
    12: (1.356, 1.782, 2.179, 2.681, 3.055, 4.318),
    13: (1.350, 1.771, 2.160, 2.650, 3.012, 4.221),
    14: (1.345, 1.761, 2.145, 2.624, 2.977, 4.140),
    15: (1.341, 1.753, 2.131, 2.602, 2.947, 4.073),
    16: (1.337, 1.746, 2.120, 2.583, 2.921, 4.015),
    17: (1.333, 1.740, 2.110, 2.567, 2.898, 3.965),
    18: (1.330, 1.734, 2.101, 2.552, 2.878, 3.922),
    19: (1.328, 1.729, 2.093, 2.539, 2.861, 3.883),
    20: (1.325, 1.725, 2.086, 2.528, 2.845, 3.850),
    21: (1.323, 1.721, 2.080, 2.518, 2.831, 3.819),
    22: (1.321, 1.717, 2.074, 2.508, 2.819, 3.792),
    23: (1.319, 1.714, 2.069, 2.500, 2.807, 3.768),
    24: (1.318, 1.711, 2.064, 2.492, 2.797, 3.745),
    25: (1.316, 1.708, 2.060, 2.485, 2.787, 3.725),
    26: (1.315, 1.706, 2.056, 2.479, 2.779, 3.707),
    27: (1.314, 1.703, 2.052, 2.473, 2.771, 3.690),
    28: (1.313, 1.701, 2.048, 2.467, 2.763, 3.674),
    29: (1.311, 1.699, 2.045, 2.462, 2.756, 3.659),
    30: (1.310, 1.697, 2.042, 2.457, 2.750, 3.646),
    40: (1.303, 1.684, 2.021, 2.423, 2.704, 3.551),
    50: (1.299, 1.676, 2.009, 2.403, 2.678, 3.496),
    60: (1.296, 1.671, 2.000, 2.390, 2.660, 3.460),
    80: (1.292, 1.664, 1.990, 2.374, 2.639, 3.416),
    100: (1.290, 1.660, 1.984, 2.364, 2.626, 3.390),
    120: (1.289, 1.658, 1.980, 2.358, 2.617, 3.373),
    200: (1.286, 1.653, 1.972, 2.345, 2.601, 3.340),
    300: (1.284, 1.650, 1.968, 2.339, 2.592, 3.323),
}
# Higher-precision rows for the common sample sizes 100 and 200.
_T_PARTIAL_ROWS: dict[int, dict[float, float]] = {
    99: {0.95: 1.6603911559963895, 0.975: 1.9842169515086827, 0.995: 2.6264054572808275},
    199: {0.95: 1.652546746165939, 0.975: 1.971956544249395, 0.995: 2.600760216031323},
}
T_MAX_DF = 300


def _build_t_table() -> dict[float, dict[int, float]]:
    table: dict[float, dict[int, float]] = {p: {} for p in T_PROBABILITIES}
    for df, row in _T_ROWS.items():
        for p, value in zip(T_PROBABILITIES, row):
            table[p][df] = value
    for df, partial in _T_PARTIAL_ROWS.items():
        for p, value in partial.items():
            table[p][df] = value
    return {p: dict(sorted(column.items())) for p, column in table.items()}


T_TABLE = _build_t_table()

# Lower-tail probabilities P(X <= x).
CHI2_PROBABILITIES = (0.005, 0.01, 0.025, 0.05, 0.10, 0.90, 0.95, 0.975, 0.99, 0.995)
_CHI2_ROWS: dict[int, tuple[float, ...]] = {
    1: (0.0000393, 0.000157, 0.000982, 0.00393, 0.0158, 2.706, 3.841, 5.024, 6.635, 7.879),
    2: (0.0100, 0.0201, 0.0506, 0.103, 0.211, 4.605, 5.991, 7.378, 9.210, 10.597),
    3: (0.0717, 0.115, 0.216, 0.352, 0.584, 6.251, 7.815, 9.348, 11.345, 12.838),
    4: (0.207, 0.297, 0.484, 0.711, 1.064, 7.779, 9.488, 11.143, 13.277, 14.860),
    5: (0.412, 0.554, 0.831, 1.145, 1.610, 9.236, 11.070, 12.833, 15.086, 16.750),
    6: (0.676, 0.872, 1.237, 1.635, 2.204, 10.645, 12.592, 14.449, 16.812, 18.548),
    7: (0.989, 1.239, 1.690, 2.167, 2.833, 12.017, 14.067, 16.013, 18.475, 20.278),
    8: (1.344, 1.646, 2.180, 2.733, 3.490, 13.362, 15.507, 17.535, 20.090, 21.955),
    9: (1.735, 2.088, 2.700, 3.325, 4.168, 14.684, 16.919, 19.023, 21.666, 23.589),
    10: (2.156, 2.558, 3.247, 3.940, 4.865, 15.987, 18.307, 20.483, 23.209, 25.188),
    11: (2.603, 3.053, 3.816, 4.575, 5.578, 17.275, 19.675, 21.920, 24.725, 26.757),
    12: (3.074, 3.571, 4.404, 5.226, 6.304, 18.549, 21.026, 23.337, 26.217, 28.300),
    13: (3.565, 4.107, 5.009, 5.892, 7.042, 19.812, 22.362, 24.736, 27.688, 29.819),
    14: (4.075, 4.660, 5.629, 6.571, 7.790, 21.064, 23.685, 26.119, 29.141, 31.319),
    15: (4.601, 5.229, 6.262, 7.261, 8.547, 22.307, 24.996, 27.488, 30.578, 32.801),
    16: (5.142, 5.812, 6.908, 7.962, 9.312, 23.542, 26.296, 28.845, 32.000, 34.267),
    17: (5.697, 6.408, 7.564, 8.672, 10.085, 24.769, 27.587, 30.191, 33.409, 35.718),
    18: (6.265, 7.015, 8.231, 9.390, 10.865, 25.989, 28.869, 31.526, 34.805, 37.156),
    19: (6.844, 7.633, 8.907, 10.117, 11.651, 27.204, 30.144, 32.852, 36.191, 38.582),
    20: (7.434, 8.260, 9.591, 10.851, 12.443, 28.412, 31.410, 34.170, 37.566, 39.997),
    21: (8.034, 8.897, 10.283, 11.591, 13.240, 29.615, 32.671, 35.479, 38.932, 41.401),
    22: (8.643, 9.542, 10.982, 12.338, 14.041, 30.813, 33.924, 36.781, 40.289, 42.796),
    23: (9.260, 10.196, 11.689, 13.091, 14.848, 32.007, 35.172, 38.076, 41.638, 44.181),
    24: (9.886, 10.856, 12.401, 13.848, 15.659, 33.196, 36.415, 39.364, 42.980, 45.559),
    25: (10.520, 11.524, 13.120, 14.611, 16.473, 34.382, 37.652, 40.646, 44.314, 46.928),
    26: (11.160, 12.198, 13.844, 15.379, 17.292, 35.563, 38.885, 41.923, 45.642, 48.290),
    27: (11.808, 12.879, 14.573, 16.151, 18.114, 36.741, 40.113, 43.195, 46.963, 49.645),
    28: (12.461, 13.565, 15.308, 16.928, 18.939, 37.916, 41.337, 44.461, 48.278, 50.993),
    29: (13.121, 14.256, 16.047, 17.708, 19.768, 39.087, 42.557, 45.722, 49.588, 52.336),
    30: (13.787, 14.953, 16.791, 18.493, 20.599, 40.256, 43.773, 46.979, 50.892, 53.672),
    40: (20.707, 22.164, 24.433, 26.509, 29.051, 51.805, 55.758, 59.342, 63.691, 66.766),
    50: (27.991, 29.707, 32.357, 34.764, 37.689, 63.167, 67.505, 71.420, 76.154, 79.490),
    60: (35.534, 37.485, 40.482, 43.188, 46.459, 74.397, 79.082, 83.298, 88.379, 91.952),
    70: (43.275, 45.442, 48.758, 51.739, 55.329, 85.527, 90.531, 95.023, 100.425, 104.215),
    80: (51.172, 53.540, 57.153, 60.391, 64.278, 96.578, 101.879, 106.629, 112.329, 116.321),
    90: (59.196, 61.754, 65.647, 69.126, 73.291, 107.565, 113.145, 118.136, 124.116, 128.299),
    100: (67.328, 70.065, 74.222, 77.929, 82.358, 118.498, 124.342, 129.561, 135.807, 140.169),
}
CHI2_MAX_DF = 100
CHI2_APPROXIMATION_DF = 300
CHI2_TABLE: dict[float, dict[int, float]] = {
    p: {df: row[i] for df, row in _CHI2_ROWS.items()} for i, p in enumerate(CHI2_PROBABILITIES)
}


def _require_probability(p: float) -> None:
    if not (isinstance(p, (int, float)) and 0.0 < p < 1.0):
        raise NumericDegenerateError(f"Probability must be in (0, 1), got {p!r}")


def _require_df(df: int) -> None:
    if isinstance(df, bool) or not isinstance(df, int) or df < 1:
        raise InvalidParameterError(f"Degrees of freedom must be a positive integer, got {df!r}")


def _match_column(p: float, columns: Sequence[float]) -> Optional[float]:
    for column in columns:
        if math.isclose(p, column, rel_tol=0.0, abs_tol=1e-9):
            return column
    return None


def _bracket(column: Mapping[int, float], df: int) -> tuple[int, int]:
    keys = list(column)
    if df < keys[0] or df > keys[-1]:
        raise InvalidParameterError(f"df={df} outside tabulated range [{keys[0]}, {keys[-1]}]")
    upper = bisect.bisect_left(keys, df)
    return keys[upper - 1], keys[upper]


def standard_normal_quantile(p: float) -> float:
    """Inverse standard normal CDF (Acklam, relative error below 1.2e-9)."""

    _require_probability(p)
    if p < _P_LOW:
        q = math.sqrt(-2 * math.log(p))
        return (((((_C[0] * q + _C[1]) * q + _C[2]) * q + _C[3]) * q + _C[4]) * q + _C[5]) / (
            (((_D[0] * q + _D[1]) * q + _D[2]) * q + _D[3]) * q + 1
        )
    if p > _P_HIGH:
        q = math.sqrt(-2 * math.log(1 - p))
        return -(((((_C[0] * q + _C[1]) * q + _C[2]) * q + _C[3]) * q + _C[4]) * q + _C[5]) / (
            (((_D[0] * q + _D[1]) * q + _D[2]) * q + _D[3]) * q + 1
        )
    q = p - 0.5
    r = q * q
    return (
        (((((_A[0] * r + _A[1]) * r + _A[2]) * r + _A[3]) * r + _A[4]) * r + _A[5])
        * q
        / (((((_B[0] * r + _B[1]) * r + _B[2]) * r + _B[3]) * r + _B[4]) * r + 1)
    )


def two_sided_z(confidence_level: float) -> float:
    """z such that P(|Z| <= z) equals ``confidence_level``."""

    _require_probability(confidence_level)
    known = _match_column(confidence_level, tuple(STANDARD_NORMAL_TWO_SIDED))
    if known is not None:
        return STANDARD_NORMAL_TWO_SIDED[known]
    alpha = 1 - confidence_level
    return standard_normal_quantile(1 - alpha / 2)


def table_t_quantile(p: float, df: int) -> float:
    """Tabulated t quantile, interpolated linearly in ``1/df`` between rows."""

    _require_df(df)
    column_key = _match_column(p, T_PROBABILITIES)
    if column_key is None:
        raise InvalidParameterError(f"p={p} is not a tabulated t probability")
    column = T_TABLE[column_key]
    if df in column:
        return column[df]
    lo, hi = _bracket(column, df)
    weight = (1 / df - 1 / hi) / (1 / lo - 1 / hi)
    return column[hi] + weight * (column[lo] - column[hi])


def student_t_quantile(p: float, df: int) -> float:
    """One-sided quantile ``t_p(df)``."""

    _require_probability(p)
    _require_df(df)
    if df > T_MAX_DF:
        return standard_normal_quantile(p)
    if _match_column(p, T_PROBABILITIES) is not None:
        return table_t_quantile(p, df)
    if _match_column(1 - p, T_PROBABILITIES) is not None:
        return -table_t_quantile(1 - p, df)
    return float(stats.t.ppf(p, df))


def table_chi2_quantile(p: float, df: int) -> float:
    """Tabulated chi-squared quantile, interpolated linearly in ``df`` between rows."""

    _require_df(df)
    column_key = _match_column(p, CHI2_PROBABILITIES)
    if column_key is None:
        raise InvalidParameterError(f"p={p} is not a tabulated chi-squared probability")
    column = CHI2_TABLE[column_key]
    if df in column:
        return column[df]
    lo, hi = _bracket(column, df)
    weight = (df - lo) / (hi - lo)
    return column[lo] + weight * (column[hi] - column[lo])


def wilson_hilferty_chi2(p: float, df: int) -> float:
    _require_probability(p)
    _require_df(df)
    z = standard_normal_quantile(p)
    h = 2 / (9 * df)
    return df * (1 - h + z * math.sqrt(h)) ** 3


def chi_squared_quantile(p: float, df: int) -> float:
    """Lower-tail quantile: x with ``P(X <= x) = p`` for X ~ chi2(df)."""

    _require_probability(p)
    _require_df(df)
    if df > CHI2_APPROXIMATION_DF:
        return wilson_hilferty_chi2(p, df)
    if df <= CHI2_MAX_DF and _match_column(p, CHI2_PROBABILITIES) is not None:
        return table_chi2_quantile(p, df)
    # past the last table row or off the tabulated columns
    return float(stats.chi2.ppf(p, df))
