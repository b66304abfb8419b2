"""
Stepwise model selection.

Public API:
    select_forward(data, response, candidates=None, ...) -> StepwiseSolution
"""

import math
from typing import Any, Sequence

from lmstep.core.datasource import as_datasource
from lmstep.core.exceptions import ValidationError
from lmstep.core.result import Result
from lmstep.core.compute.timing import Timer
from lmstep.core.validation import check_unique_names
from lmstep.regression.design import RegressionDesign
from lmstep.regression.solution import LinearSolution
from lmstep.regression.solvers import fit
from lmstep.selection._common import SelectionStep, StepwiseParams
from lmstep.selection.solution import StepwiseSolution


def select_forward(
    data: Any,
    response: str,
    candidates: Sequence[str] | None = None,
    *,
    k: float = 2.0,
    max_steps: int | None = None,
) -> StepwiseSolution:
    """
    Forward stepwise selection by AIC.

    Starts from the intercept-only model. At each step every remaining
    candidate is added in turn, the extended models are scored with
    n * log(RSS / n) + k * p, and the best one is kept if its AIC is
    strictly lower than the current model's. Ties go to the candidate
    whose name sorts first.

    Args:
        data: Tabular data (DataSource, DataFrame, mapping, list of records)
        response: Response column name
        candidates: Predictors the search may add. None means every
            column except the response.
        k: Penalty per parameter. 2 gives AIC, log(n) gives BIC.
        max_steps: Stop after this many additions (None: no limit)

    Returns:
        StepwiseSolution with the final model and the trace of steps

    Raises:
        UnknownFieldError: If response or a candidate is not a column
        ValidationError: For invalid k, max_steps or candidate lists
        InsufficientDataError, DegenerateFitError: Propagated from fit()

    Example:
        >>> result = select_forward(train, 'mpg')
        >>> result.selected
        ('wt', 'cyl', 'hp')
        >>> print(result.summary())
    """
    ds = as_datasource(data)
    ds.require([response], role='response')

    if candidates is None:
        candidates = tuple(c for c in ds.columns if c != response)
    else:
        candidates = check_unique_names(candidates, 'candidates')
        if response in candidates:
            raise ValidationError(
                f"candidates: response {response!r} cannot also be a candidate"
            )
        ds.require(candidates, role='candidate')

    k = _check_penalty(k)
    if max_steps is not None:
        if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
            raise ValidationError(f"max_steps: expected a non-negative int, got {max_steps!r}")

    timer = Timer()
    timer.start()

    with timer.section('null_model'):
        current = fit(RegressionDesign.from_datasource(ds, response, ()))
    current_aic = current.extract_aic(k)
    start = SelectionStep(
        term='',
        df=None,
        deviance=None,
        resid_df=current.df_residual,
        resid_dev=current.rss,
        aic=current_aic,
    )

    selected: list[str] = []
    remaining = list(candidates)
    steps: list[SelectionStep] = []
    n_models_fit = 1
    stop_reason = 'exhausted'

    while remaining:
        if max_steps is not None and len(steps) >= max_steps:
            stop_reason = 'max_steps'
            break

        scored: list[tuple[float, str, LinearSolution]] = []
        with timer.section('candidate_fits'):
            for name in remaining:
                design = RegressionDesign.from_datasource(ds, response, selected + [name])
                candidate = fit(design)
                n_models_fit += 1
                scored.append((candidate.extract_aic(k), name, candidate))

        scored.sort(key=lambda s: (s[0], s[1]))
        best_aic, best_name, best = scored[0]

        if not best_aic < current_aic:
            stop_reason = 'no_improvement'
            break

        steps.append(SelectionStep(
            term=best_name,
            df=best.df_residual - current.df_residual,
            deviance=current.rss - best.rss,
            resid_df=best.df_residual,
            resid_dev=best.rss,
            aic=best_aic,
        ))
        selected.append(best_name)
        remaining.remove(best_name)
        current, current_aic = best, best_aic

    timer.stop()

    params = StepwiseParams(
        start=start,
        steps=tuple(steps),
        selected=tuple(selected),
        candidates=tuple(candidates),
        k=k,
        n_models_fit=n_models_fit,
        stop_reason=stop_reason,
    )

    result = Result(
        params=params,
        info={
            'method': 'forward',
            'criterion': 'AIC' if k == 2.0 else f'k={k:g}',
            'formula': current.formula(),
        },
        timing=timer.result(),
        backend_name=current.backend_name,
        warnings=current.warnings,
    )
    return StepwiseSolution(_result=result, _model=current)


def _check_penalty(k: float) -> float:
    try:
        k = float(k)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"k: expected a number, got {k!r}") from e
    if not math.isfinite(k) or k < 0:
        raise ValidationError(f"k: must be a finite non-negative number, got {k}")
    return k
