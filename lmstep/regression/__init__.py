"""
Linear models.

This module provides ordinary least squares regression with an intercept,
R-style inference (standard errors, t and p values, R², F test, AIC) and
prediction with mean-response confidence intervals.

Public API:
    fit(data, response, predictors) -> LinearSolution
    predict(model, data, confidence_level=None) -> PredictionSolution

Example:
    >>> from lmstep.regression import fit
    >>> model = fit(ds, 'mpg', ['wt', 'cyl'])
    >>> print(model.summary())
    >>> model.predict(test, confidence_level=0.95)
"""

from lmstep.regression.design import RegressionDesign, INTERCEPT
from lmstep.regression.solution import LinearSolution, LinearParams, CoefficientRow
from lmstep.regression.solvers import fit
from lmstep.regression.prediction import predict, Prediction, PredictionSolution

__all__ = [
    "fit",
    "predict",
    "RegressionDesign",
    "INTERCEPT",
    "LinearSolution",
    "LinearParams",
    "CoefficientRow",
    "Prediction",
    "PredictionSolution",
]
