"""
User-facing stepwise selection result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lmstep.core.result import Result
from lmstep.regression.solution import LinearSolution
from lmstep.selection._common import SelectionStep, StepwiseParams


@dataclass
class StepwiseSolution:
    """
    Result of forward stepwise selection.

    Holds the final fitted model and the trace of accepted steps.
    """
    _result: Result[StepwiseParams]
    _model: LinearSolution

    @property
    def model(self) -> LinearSolution:
        """The final selected model."""
        return self._model

    @property
    def steps(self) -> tuple[SelectionStep, ...]:
        """Accepted additions, in order (the starting row excluded)."""
        return self._result.params.steps

    @property
    def selected(self) -> tuple[str, ...]:
        """Selected predictors in order of entry."""
        return self._result.params.selected

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._result.params.candidates

    @property
    def initial_aic(self) -> float:
        """AIC of the intercept-only starting model."""
        return self._result.params.start.aic

    @property
    def aic(self) -> float:
        """AIC of the final model (same penalty k as the search)."""
        if self.steps:
            return self.steps[-1].aic
        return self.initial_aic

    @property
    def k(self) -> float:
        return self._result.params.k

    @property
    def stop_reason(self) -> str:
        return self._result.params.stop_reason

    @property
    def n_models_fit(self) -> int:
        return self._result.params.n_models_fit

    def anova(self) -> tuple[SelectionStep, ...]:
        """Full trace as R prints it: the starting row, then each step."""
        return (self._result.params.start,) + self.steps

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Selection trace followed by the final model formula."""
        lines = [
            "Forward Stepwise Selection (AIC)",
            "=" * 66,
            f"Start:  {self._model.response} ~ 1",
            f"Scope:  {', '.join(self.candidates) if self.candidates else '(none)'}",
            f"Penalty k: {self.k:g}",
            "",
            f"{'Step':<14} {'Df':>4} {'Deviance':>12} {'Resid. Df':>10} "
            f"{'Resid. Dev':>12} {'AIC':>10}",
            "-" * 66,
        ]
        for row in self.anova():
            df_str = f"{row.df:>4d}" if row.df is not None else "  NA"
            dev_str = f"{row.deviance:>12.4f}" if row.deviance is not None else "          NA"
            lines.append(
                f"{row.label:<14} {df_str} {dev_str} {row.resid_df:>10d} "
                f"{row.resid_dev:>12.4f} {row.aic:>10.4f}"
            )
        lines.append("-" * 66)
        lines.append(f"Final model: {self._model.formula()}")
        lines.append(f"Stopped: {self.stop_reason}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"StepwiseSolution({self._model.formula()!r}, "
            f"steps={len(self.steps)}, aic={self.aic:.4f})"
        )
