"""
Prediction from fitted linear models.

predict() applies a LinearSolution to new rows and, optionally, adds
confidence intervals for the mean response, matching

    predict(model, newdata, interval = "confidence", level = 0.95)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, overload
import numpy as np
from numpy.typing import NDArray

from lmstep.core.datasource import as_datasource
from lmstep.core.validation import check_probability
from lmstep.core.compute.distributions import t_critical
from lmstep.regression.solution import LinearSolution


@dataclass(frozen=True)
class Prediction:
    """
    Response estimate for one record.

    lower, upper and level are None when no interval was requested.
    """
    fit: float
    lower: float | None = None
    upper: float | None = None
    level: float | None = None


@dataclass(frozen=True)
class PredictionSolution:
    """
    Ordered predictions for a set of records.

    Behaves as a sequence of Prediction (same order as the input rows)
    and also exposes the underlying arrays.
    """
    fit: NDArray[np.floating[Any]]
    se_fit: NDArray[np.floating[Any]]
    lower: NDArray[np.floating[Any]] | None
    upper: NDArray[np.floating[Any]] | None
    level: float | None
    row_names: tuple[str, ...]
    df_residual: int

    def __len__(self) -> int:
        return int(self.fit.shape[0])

    @overload
    def __getitem__(self, index: int) -> Prediction: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Prediction, ...]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._at(i) for i in range(len(self))[index])
        n = len(self)
        if index < -n or index >= n:
            raise IndexError(f"prediction index {index} out of range for {n} rows")
        return self._at(index % n)

    def __iter__(self) -> Iterator[Prediction]:
        for i in range(len(self)):
            yield self._at(i)

    def _at(self, i: int) -> Prediction:
        if self.lower is None:
            return Prediction(fit=float(self.fit[i]))
        return Prediction(
            fit=float(self.fit[i]),
            lower=float(self.lower[i]),
            upper=float(self.upper[i]),
            level=self.level,
        )

    @property
    def has_interval(self) -> bool:
        return self.lower is not None

    def residuals(self, actual: Any) -> NDArray[np.floating[Any]]:
        """actual - predicted, for an array of observed responses."""
        actual_arr = np.asarray(actual, dtype=np.float64)
        if actual_arr.shape != self.fit.shape:
            raise ValueError(
                f"actual: shape {actual_arr.shape} doesn't match predictions {self.fit.shape}"
            )
        return actual_arr - self.fit

    def __repr__(self) -> str:
        interval = f", level={self.level}" if self.level is not None else ""
        return f"PredictionSolution(n={len(self)}{interval})"


def predict(
    model: LinearSolution,
    data: Any,
    confidence_level: float | None = None,
) -> PredictionSolution:
    """
    Predict the response for new records.

    Args:
        model: Fitted LinearSolution
        data: Records to predict (DataSource, DataFrame, mapping of
            columns or list of records). Must contain every predictor of
            the model; other columns are ignored.
        confidence_level: If given (e.g. 0.95), add a confidence interval
            for the mean response at each record

    Returns:
        PredictionSolution in the same row order as data

    Raises:
        UnknownFieldError: If data lacks one of the model's predictors
        ValidationError: If confidence_level is outside (0, 1)
    """
    ds = as_datasource(data)
    X_new = model.design.model_matrix(ds)
    fit_values = X_new @ model.coefficients

    # Var(x0'β) = σ² x0' (X'X)⁻¹ x0
    leverage = np.einsum('ij,jk,ik->i', X_new, model.unscaled_covariance, X_new)
    se_fit = np.sqrt(model.sigma_squared * np.maximum(leverage, 0.0))

    lower = upper = None
    level = None
    if confidence_level is not None:
        level = check_probability(confidence_level, 'confidence_level')
        q = t_critical(level, model.df_residual)
        lower = fit_values - q * se_fit
        upper = fit_values + q * se_fit

    return PredictionSolution(
        fit=fit_values,
        se_fit=se_fit,
        lower=lower,
        upper=upper,
        level=level,
        row_names=ds.row_names,
        df_residual=model.df_residual,
    )
