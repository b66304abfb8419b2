"""
Common data types for stepwise selection.

Contains the frozen parameter payload that goes inside the Result[P]
envelope. Pure data containers, no computation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectionStep:
    """
    One row of the selection trace (R's step()$anova).

    For an accepted addition df is -1 and deviance is the drop in
    residual sum of squares. The starting row of the trace has term ''
    and df/deviance None.
    """
    term: str
    df: int | None
    deviance: float | None
    resid_df: int
    resid_dev: float
    aic: float

    @property
    def label(self) -> str:
        """Step label as R prints it, e.g. '+ wt'."""
        return f"+ {self.term}" if self.term else ''


@dataclass(frozen=True)
class StepwiseParams:
    """Parameter payload for forward stepwise selection."""
    start: SelectionStep                 # intercept-only model
    steps: tuple[SelectionStep, ...]     # accepted additions, in order
    selected: tuple[str, ...]            # predictors in order of entry
    candidates: tuple[str, ...]          # scope offered to the search
    k: float                             # penalty per parameter
    n_models_fit: int
    stop_reason: str                     # 'no_improvement', 'exhausted', 'max_steps'
