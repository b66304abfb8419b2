"""
lmstep: R-compatible linear models with stepwise selection.

Ordinary least squares with summary.lm()-style inference, forward
stepwise selection by AIC, reproducible train/test splits, prediction
with confidence intervals, and side-by-side model comparison.

Submodules:
    regression: OLS fitting and prediction
    selection: Forward stepwise selection
    sampling: Train/test splitting
    comparison: Prediction/residual tables across models
    datasets: Bundled reference data (mtcars)
"""

__version__ = "0.1.0"

from lmstep.core.datasource import DataSource, as_datasource
from lmstep.core.exceptions import (
    LmStepError,
    ValidationError,
    UnknownFieldError,
    InsufficientDataError,
    DegenerateFitError,
)
from lmstep.regression import fit, predict, LinearSolution, PredictionSolution
from lmstep.selection import select_forward, StepwiseSolution
from lmstep.sampling import train_test_split, SplitResult
from lmstep.comparison import compare_models, ComparisonTable
from lmstep.datasets import load_mtcars

__all__ = [
    "__version__",
    "DataSource",
    "as_datasource",
    "LmStepError",
    "ValidationError",
    "UnknownFieldError",
    "InsufficientDataError",
    "DegenerateFitError",
    "fit",
    "predict",
    "LinearSolution",
    "PredictionSolution",
    "select_forward",
    "StepwiseSolution",
    "train_test_split",
    "SplitResult",
    "compare_models",
    "ComparisonTable",
    "load_mtcars",
]
