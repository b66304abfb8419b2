"""
Regression Design.

Design wraps a DataSource and extracts X (design matrix, intercept
column first) and y (response). It knows it's building a regression;
DataSource doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from lmstep.core.datasource import DataSource, as_datasource
from lmstep.core.exceptions import ValidationError
from lmstep.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_residual_df,
    check_unique_names,
)

INTERCEPT = '(Intercept)'


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design matrix specification.

    Immutable after construction. X always carries a leading column of
    ones; coefficients are reported in the order of column_names.

    Construction:
        RegressionDesign.from_datasource(ds, 'mpg', ['wt', 'cyl'])
        RegressionDesign.from_datasource(ds, 'mpg')        # every other column
        RegressionDesign.from_datasource(ds, 'mpg', [])    # intercept only
        RegressionDesign.from_arrays(X, y)                 # X without intercept
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _response: str
    _predictors: tuple[str, ...]
    _source: DataSource | None = None

    @classmethod
    def from_datasource(
        cls,
        source: Any,
        response: str,
        predictors: Sequence[str] | None = None,
    ) -> RegressionDesign:
        """
        Build Design from tabular data.

        Args:
            source: DataSource or anything as_datasource() accepts
            response: Response column name
            predictors: Predictor column names. None means every column
                except the response, in column order; an empty sequence
                gives the intercept-only model.

        Returns:
            Design ready for regression

        Raises:
            UnknownFieldError: If response or a predictor is not a column
            ValidationError: If the response is also listed as a predictor
            InsufficientDataError: If n <= number of parameters
        """
        source = as_datasource(source)
        if not isinstance(response, str):
            raise ValidationError(f"response: expected a column name, got {response!r}")
        source.require([response], role='response')

        if predictors is None:
            predictors = tuple(c for c in source.columns if c != response)
        else:
            predictors = check_unique_names(predictors, 'predictors')
            if response in predictors:
                raise ValidationError(
                    f"predictors: response {response!r} cannot also be a predictor"
                )
            source.require(predictors, role='predictor')

        X = source.matrix(predictors)
        y = source[response]
        return cls._build(X, y, response, predictors, source=source)

    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        *,
        predictors: Sequence[str] | None = None,
        response: str = 'y',
    ) -> RegressionDesign:
        """
        Build Design directly from arrays.

        X holds the predictors only; the intercept column is added here.
        Predictor names default to x1, x2, ...
        """
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()
        check_2d(X_arr, 'X')

        if predictors is None:
            predictors = tuple(f"x{j + 1}" for j in range(X_arr.shape[1]))
        else:
            predictors = check_unique_names(predictors, 'predictors')
        if len(predictors) != X_arr.shape[1]:
            raise ValidationError(
                f"predictors: {len(predictors)} names for {X_arr.shape[1]} columns of X"
            )
        return cls._build(X_arr, y_arr, response, predictors, source=None)

    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        response: str,
        predictors: tuple[str, ...],
        source: DataSource | None,
    ) -> RegressionDesign:
        """Internal builder with validation."""
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        check_2d(X, 'X')
        check_1d(y, response)
        check_consistent_length(X, y, names=('X', response))
        check_finite(X, 'X')
        check_finite(y, response)

        n = X.shape[0]
        p = X.shape[1] + 1
        check_residual_df(n, p, 'fit')

        X_full = np.column_stack([np.ones(n), X]) if X.shape[1] else np.ones((n, 1))
        return cls(
            _X=X_full,
            _y=y.copy(),
            _response=response,
            _predictors=tuple(predictors),
            _source=source,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p), intercept column first."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._X.shape[0]

    @property
    def p(self) -> int:
        """Number of parameters, intercept included."""
        return self._X.shape[1]

    @property
    def response(self) -> str:
        return self._response

    @property
    def predictors(self) -> tuple[str, ...]:
        return self._predictors

    @property
    def column_names(self) -> tuple[str, ...]:
        """Coefficient names: '(Intercept)' then the predictors."""
        return (INTERCEPT,) + self._predictors

    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source

    def model_matrix(self, data: Any) -> NDArray[np.floating[Any]]:
        """
        Design matrix for new data, using this design's predictors.

        Columns of data that aren't predictors are ignored.

        Raises:
            UnknownFieldError: If data lacks a predictor
        """
        ds = as_datasource(data)
        ds.require(self._predictors, role='predictor')
        X_new = ds.matrix(self._predictors)
        check_finite(X_new, 'newdata')
        return np.column_stack([np.ones(ds.n_observations), X_new])
