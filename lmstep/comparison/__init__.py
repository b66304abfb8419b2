"""
Model comparison.

Public API:
    compare_models(models, data, response=None) -> ComparisonTable
"""

from lmstep.comparison.compare import compare_models, ComparisonTable
from lmstep.comparison._common import ComparisonRow, ResidualSummary

__all__ = [
    "compare_models",
    "ComparisonTable",
    "ComparisonRow",
    "ResidualSummary",
]
