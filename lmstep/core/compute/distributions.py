"""
Distribution functions used by inference on linear models.

Thin wrappers over scipy.stats that fix the tail conventions used
throughout the library (two-sided t tests, upper-tail F tests, central
t quantiles for intervals) and validate degrees of freedom.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats

from lmstep.core.exceptions import ValidationError


def _check_df(df: float, name: str) -> None:
    if not np.isfinite(df) or df <= 0:
        raise ValidationError(f"{name}: degrees of freedom must be positive, got {df}")


def t_cdf(x: ArrayLike, df: float) -> NDArray[np.floating[Any]]:
    """Student-t cumulative distribution function."""
    _check_df(df, 'df')
    return np.asarray(stats.t.cdf(x, df), dtype=np.float64)


def t_quantile(q: float, df: float) -> float:
    """Student-t quantile function (inverse CDF)."""
    _check_df(df, 'df')
    if not (0.0 < q < 1.0):
        raise ValidationError(f"q: must be in (0, 1), got {q}")
    return float(stats.t.ppf(q, df))


def t_two_sided_p(t: ArrayLike, df: float) -> NDArray[np.floating[Any]]:
    """
    Two-sided p-values for t statistics: P(|T| >= |t|).

    Uses the survival function, not 1 - cdf, so very small p-values
    keep their precision (matches R's 2 * pt(-abs(t), df)).
    NaN statistics give NaN p-values.
    """
    _check_df(df, 'df')
    t_arr = np.asarray(t, dtype=np.float64)
    return 2.0 * stats.t.sf(np.abs(t_arr), df)


def t_critical(level: float, df: float) -> float:
    """Critical value for a central interval with the given coverage."""
    if not (0.0 < level < 1.0):
        raise ValidationError(f"level: must be in (0, 1), got {level}")
    return t_quantile((1.0 + level) / 2.0, df)


def f_cdf(x: ArrayLike, df1: float, df2: float) -> NDArray[np.floating[Any]]:
    """F cumulative distribution function."""
    _check_df(df1, 'df1')
    _check_df(df2, 'df2')
    return np.asarray(stats.f.cdf(x, df1, df2), dtype=np.float64)


def f_upper_p(f: float, df1: float, df2: float) -> float:
    """Upper-tail p-value of an F statistic: P(F >= f)."""
    _check_df(df1, 'df1')
    _check_df(df2, 'df2')
    return float(stats.f.sf(f, df1, df2))
