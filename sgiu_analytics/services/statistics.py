"""
Correlation and Simple Linear Regression Service.

This module implements the paired-series statistics shown on the dashboard's
correlation and simple regression pages:
- Reports per month vs average satisfaction
- Active students per month vs reports per month

Algorithm Overview:
    Both primitives truncate the two input sequences to their common length
    n = min(len(x), len(y)) and work on centered values:

        Sxy = sum((x_i - mean_x) * (y_i - mean_y))
        Sxx = sum((x_i - mean_x) ** 2)
        Syy = sum((y_i - mean_y) ** 2)

        r         = Sxy / sqrt(Sxx * Syy)
        slope     = Sxy / Sxx
        intercept = mean_y - slope * mean_x

    Deviations are divided by their largest magnitude before the products are
    summed, so very large inputs do not overflow the sums of squares.

Failure Semantics:
    Nothing here raises on data conditions. Too few observations or a constant
    sequence produce NaN (pearson) or an invalid RegressionFit with a reason
    code, and callers render a "need more data" state.

Dependencies:
    - numpy: Vectorized means and centered sums
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from sgiu_analytics.models.enums import FitReason
from sgiu_analytics.models.schemas import CorrelationResult, LinePoint, RegressionFit


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Fewer paired observations than this cannot define a line or a correlation.
MIN_OBSERVATIONS: int = 2


# =============================================================================
# Helpers
# =============================================================================


def _common_prefix(
    x: Sequence[float],
    y: Sequence[float]
) -> Tuple[np.ndarray, np.ndarray]:
    """Return float64 arrays of the first min(len(x), len(y)) elements of each."""
    n = min(len(x), len(y))
    return (
        np.asarray(list(x)[:n], dtype=np.float64),
        np.asarray(list(y)[:n], dtype=np.float64),
    )


def _is_constant(values: np.ndarray) -> bool:
    # Rounding in the mean can leave tiny non-zero deviations for constant input
    return bool(np.all(values == values[0]))


def _scaled_deviations(values: np.ndarray) -> Tuple[float, float, np.ndarray]:
    """
    Return (mean, scale, deviations / scale) for a numeric array.

    scale is the largest absolute deviation (1.0 for constant input), so the
    scaled deviations lie in [-1, 1] and their squares cannot overflow.
    """
    mean = float(np.mean(values))
    deviations = values - mean
    scale = float(np.max(np.abs(deviations)))
    if scale == 0 or not math.isfinite(scale):
        scale = 1.0
    return mean, scale, deviations / scale


# =============================================================================
# Pearson Correlation
# =============================================================================


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Calculate the Pearson product-moment correlation coefficient.

    Only the first min(len(x), len(y)) elements of each sequence are used.

    Args:
        x: First ordered numeric sequence
        y: Second ordered numeric sequence

    Returns:
        Correlation coefficient in [-1, 1], or math.nan when fewer than 2
        observations are available or either sequence has zero variance.

    Example:
        >>> pearson([1, 2, 3, 4], [2, 4, 6, 8])
        1.0
        >>> math.isnan(pearson([1, 2, 3], [5, 5, 5]))
        True
    """
    xs, ys = _common_prefix(x, y)
    if len(xs) < MIN_OBSERVATIONS:
        return math.nan
    if _is_constant(xs) or _is_constant(ys):
        return math.nan

    # r is scale invariant, so the scaled deviations give the same value
    _, _, ux = _scaled_deviations(xs)
    _, _, uy = _scaled_deviations(ys)
    den = math.sqrt(float(np.sum(ux * ux)) * float(np.sum(uy * uy)))
    if den == 0 or not math.isfinite(den):
        return math.nan
    r = float(np.sum(ux * uy)) / den
    if not math.isfinite(r):
        return math.nan
    return r


def correlation_summary(x: Sequence[float], y: Sequence[float]) -> CorrelationResult:
    """
    Calculate Pearson correlation and report why it is undefined, if it is.

    Args:
        x: First ordered numeric sequence
        y: Second ordered numeric sequence

    Returns:
        CorrelationResult with r=None and a reason when pearson() is NaN.
    """
    n = min(len(x), len(y))
    r = pearson(x, y)
    if not math.isnan(r):
        return CorrelationResult(r=r, n=n)

    reason = FitReason.INSUFFICIENT_DATA if n < MIN_OBSERVATIONS else FitReason.ZERO_VARIANCE
    return CorrelationResult(r=None, n=n, reason=reason)


# =============================================================================
# Ordinary Least Squares
# =============================================================================


def linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionFit:
    """
    Fit y = intercept + slope * x by ordinary least squares.

    Only the first min(len(x), len(y)) elements of each sequence are used.

    Args:
        x: Predictor values
        y: Response values

    Returns:
        RegressionFit:
            - n < 2: intercept=0, slope=0, valid=False, reason=insufficient_data
            - constant x: intercept=mean(y), slope=0, valid=False,
              reason=zero_variance (a flat line callers must not plot)
            - otherwise the OLS estimates with valid=True

    Example:
        >>> fit = linear_regression([0, 1, 2], [3, 5, 7])
        >>> (fit.intercept, fit.slope, fit.valid)
        (3.0, 2.0, True)
    """
    xs, ys = _common_prefix(x, y)
    n = len(xs)
    if n < MIN_OBSERVATIONS:
        return RegressionFit(
            intercept=0.0,
            slope=0.0,
            valid=False,
            reason=FitReason.INSUFFICIENT_DATA,
            n=n,
        )

    mean_x, scale_x, ux = _scaled_deviations(xs)
    mean_y, scale_y, uy = _scaled_deviations(ys)
    uxx = float(np.sum(ux * ux))
    if uxx == 0 or _is_constant(xs):
        return RegressionFit(
            intercept=mean_y,
            slope=0.0,
            valid=False,
            reason=FitReason.ZERO_VARIANCE,
            n=n,
        )

    slope = (scale_y / scale_x) * (float(np.sum(ux * uy)) / uxx)
    intercept = mean_y - slope * mean_x
    logger.debug(f"OLS fit over {n} observations: y = {intercept:.4f} + {slope:.4f}x")
    return RegressionFit(intercept=intercept, slope=slope, valid=True, n=n)


def predict_linear(fit: RegressionFit, x: float) -> Optional[float]:
    """
    Predict y for a new x value from a regression fit.

    Predictions are floored at 0 because the modeled quantities (incident
    counts) cannot be negative.

    Returns:
        max(0, intercept + slope * x), or None when the fit is invalid.
    """
    if not fit.valid:
        return None
    return max(0.0, fit.intercept + fit.slope * x)


def fit_line_endpoints(fit: RegressionFit, xs: Sequence[float]) -> List[LinePoint]:
    """
    Two points spanning the fitted line for chart rendering.

    The span is [min(xs, 0), max(xs, 1)] so the line always starts at or
    before the origin.

    Returns:
        Two LinePoint values, or an empty list when the fit is invalid.
    """
    if not fit.valid:
        return []
    lo = min([*xs, 0.0])
    hi = max([*xs, 1.0])
    return [
        LinePoint(x=lo, y=fit.intercept + fit.slope * lo),
        LinePoint(x=hi, y=fit.intercept + fit.slope * hi),
    ]
