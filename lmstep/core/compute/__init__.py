"""
Shared compute infrastructure for lmstep.

This module provides timing utilities, numerical tolerances, distribution
functions and linear algebra kernels shared by the regression and
selection code.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Rank and perfect-fit tolerances
    distributions: Student-t and F CDF/quantile helpers
    linalg: Linear algebra kernels (pivoted QR)
"""

from lmstep.core.compute.timing import Timer

__all__ = [
    "Timer",
]
