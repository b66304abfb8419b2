"""
Common data types for model comparison.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ComparisonRow:
    """One (record, model) pair: observed, predicted and their difference."""
    record: str
    model: str
    actual: float
    predicted: float
    residual: float


@dataclass(frozen=True)
class ResidualSummary:
    """
    Distribution of one model's residuals on the comparison data.

    Quartiles use linear interpolation (R quantile type 7). Whiskers
    reach the most extreme residuals within 1.5 IQR of the box, as in a
    Tukey boxplot; residuals beyond them are listed as outliers.
    """
    model: str
    n: int
    mean: float
    rmse: float
    mae: float
    minimum: float
    q1: float
    median: float
    q3: float
    maximum: float
    lower_whisker: float
    upper_whisker: float
    outliers: tuple[float, ...]

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1
