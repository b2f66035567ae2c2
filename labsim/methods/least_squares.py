"""
Least Squares Line Fit
======================

Ordinary least squares for y = slope·x + intercept over paired samples,
computed from the raw sums in a single pass:

    denom     = n·Σx² - (Σx)²
    slope     = (n·Σxy - Σx·Σy) / denom
    intercept = (Σy - slope·Σx) / n
    R²        = [(n·Σxy - Σx·Σy) / sqrt(denom·(n·Σy² - (Σy)²))]²

Degenerate input (no points, or every x equal) gives the neutral fit
{slope: 0, intercept: 0, r2: 0}. When y has zero variance R² is reported as 1.
"""

import numpy as np
from scipy.stats import linregress


def _neutral_fit():
    return {'slope': 0.0, 'intercept': 0.0, 'r2': 0.0}


def linear_regression(xs, ys):
    """
    Fit a straight line through (xs[i], ys[i]).

    Returns a dict with 'slope', 'intercept' and 'r2'.
    """
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys differ in length ({len(xs)} != {len(ys)})")

    n = len(xs)
    if n == 0:
        return _neutral_fit()

    sum_x = sum_y = sum_xy = sum_xx = sum_yy = 0.0
    for x, y in zip(xs, ys):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_xx += x * x
        sum_yy += y * y

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return _neutral_fit()

    covariance_term = n * sum_xy - sum_x * sum_y
    slope = covariance_term / denominator
    intercept = (sum_y - slope * sum_x) / n

    r2_denominator = np.sqrt(denominator * (n * sum_yy - sum_y * sum_y))
    if r2_denominator == 0:
        r2 = 1.0
    else:
        r2 = (covariance_term / r2_denominator) ** 2

    return {'slope': float(slope), 'intercept': float(intercept), 'r2': float(r2)}


def slope_standard_error(xs, ys):
    """
    Standard error of the fitted slope (scipy.stats.linregress).

    Zero when there are fewer than three points or the x values are all equal.
    """
    if len(xs) < 3 or len(set(xs)) < 2:
        return 0.0
    fit = linregress(xs, ys)
    return float(fit.stderr)
