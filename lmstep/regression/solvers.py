"""
Solver dispatch for regression.

This module provides the fit() function (public API) and backend selection.
"""

from typing import Any, Literal, Sequence
import warnings

from lmstep.regression.design import RegressionDesign
from lmstep.regression.solution import LinearSolution
from lmstep.regression.backends.cpu import CPUQRBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_qr']


def fit(
    data: Any,
    response: str | None = None,
    predictors: Sequence[str] | None = None,
    *,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit a linear regression model with an intercept.

    Solves the ordinary least squares problem:
        min_β ||y - Xβ||²

    This is the primary public API for linear regression. All input
    validation, design construction, backend selection, and result
    wrapping happens here.

    Args:
        data: A RegressionDesign, or tabular data (DataSource, DataFrame,
            mapping of columns, list of records)
        response: Response column name. Required unless data is a
            RegressionDesign.
        predictors: Predictor column names. None uses every column except
            the response (R's `y ~ .`); an empty sequence fits the
            intercept-only model (`y ~ 1`).
        backend: Computational backend to use:
            - 'auto' / 'cpu' / 'cpu_qr': CPU pivoted QR decomposition

    Returns:
        LinearSolution with coefficients, diagnostics, and summary methods

    Raises:
        UnknownFieldError: If response or a predictor is not a column
        InsufficientDataError: If n <= number of parameters
        DegenerateFitError: If the predictors are collinear
        ValidationError: For other invalid inputs

    Example:
        >>> from lmstep import fit, load_mtcars
        >>> model = fit(load_mtcars(), 'mpg', ['wt'])
        >>> model.coefficient('wt')
        -5.344471...
        >>> print(model.summary())
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    if isinstance(data, RegressionDesign):
        design = data
    else:
        if response is None:
            raise ValueError("response required when data is not a RegressionDesign")
        design = RegressionDesign.from_datasource(data, response, predictors)

    # === Select Backend ===
    backend_impl = _get_backend(backend)

    # === Solve ===
    result = backend_impl.solve(design)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    # === Wrap and Return ===
    return LinearSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_qr'):
        return CPUQRBackend()

    raise ValueError(f"Unknown backend: {choice!r}")
