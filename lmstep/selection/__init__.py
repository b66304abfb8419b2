"""
Stepwise model selection.

Public API:
    select_forward(data, response, candidates=None, k=2.0, max_steps=None)
        -> StepwiseSolution
"""

from lmstep.selection.solvers import select_forward
from lmstep.selection._common import SelectionStep, StepwiseParams
from lmstep.selection.solution import StepwiseSolution

__all__ = [
    "select_forward",
    "SelectionStep",
    "StepwiseParams",
    "StepwiseSolution",
]
