"""
Core infrastructure for lmstep.

This module provides shared abstractions and utilities used by the
domain subpackages (regression, selection, sampling, comparison).

Key components:
    datasource: DataSource container and as_datasource() coercion
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, distributions, linear algebra kernels
"""

from lmstep.core.datasource import DataSource, as_datasource
from lmstep.core.result import Result
from lmstep.core.exceptions import (
    LmStepError,
    ValidationError,
    DimensionError,
    UnknownFieldError,
    InsufficientDataError,
    NumericalError,
    DegenerateFitError,
)

__all__ = [
    # Data
    "DataSource",
    "as_datasource",
    # Result
    "Result",
    # Exceptions
    "LmStepError",
    "ValidationError",
    "DimensionError",
    "UnknownFieldError",
    "InsufficientDataError",
    "NumericalError",
    "DegenerateFitError",
]
