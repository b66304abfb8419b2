"""
Side-by-side comparison of fitted models on the same records.

compare_models() predicts every record under every model and lays the
results out in long form: one row per (record, model). This is the
table a plotting layer needs for predicted-vs-actual facets and
residual boxplots.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Mapping, TYPE_CHECKING
import numpy as np

from lmstep.core.datasource import as_datasource
from lmstep.core.exceptions import ValidationError, UnknownFieldError
from lmstep.regression.solution import LinearSolution
from lmstep.comparison._common import ComparisonRow, ResidualSummary

if TYPE_CHECKING:
    import pandas as pd

WHISKER_COEF = 1.5

TABLE_COLUMNS = ('record', 'model', 'actual', 'predicted', 'residual')


@dataclass(frozen=True)
class ComparisonTable:
    """
    Long-form prediction/residual table for several models.

    Rows are record-major: all models for the first record, then all
    models for the second, and so on, records in input order and models
    in the order they were given.
    """
    rows: tuple[ComparisonRow, ...]
    models: tuple[str, ...]
    records: tuple[str, ...]
    response: str

    def __len__(self) -> int:
        return len(self.rows)

    def for_model(self, model: str) -> tuple[ComparisonRow, ...]:
        """Rows of one model, in record order."""
        if model not in self.models:
            raise UnknownFieldError(
                f"comparison has no model {model!r}. Models: {list(self.models)}",
                field=model,
                available=self.models,
            )
        return tuple(r for r in self.rows if r.model == model)

    def residuals(self, model: str) -> np.ndarray:
        return np.array([r.residual for r in self.for_model(model)], dtype=np.float64)

    def record_order(self) -> tuple[str, ...]:
        """Record labels sorted by actual response, ascending (stable)."""
        actual = {}
        for row in self.rows:
            actual.setdefault(row.record, row.actual)
        return tuple(sorted(self.records, key=lambda r: actual[r]))

    def residual_summary(self) -> dict[str, ResidualSummary]:
        """Residual distribution per model, in model order."""
        return {name: _summarize(name, self.residuals(name)) for name in self.models}

    def to_dataframe(self) -> 'pd.DataFrame':
        """Long pandas DataFrame with columns record, model, actual, predicted, residual."""
        import pandas as pd

        df = pd.DataFrame(
            [(r.record, r.model, r.actual, r.predicted, r.residual) for r in self.rows],
            columns=list(TABLE_COLUMNS),
        )
        df['model'] = pd.Categorical(df['model'], categories=list(self.models))
        return df

    def to_wide(self) -> 'pd.DataFrame':
        """
        One row per record, indexed by record label.

        Columns: the response, then '<model>_predict' and '<model>_resid'
        for each model.
        """
        import pandas as pd

        data: dict[str, list[float]] = {self.response: []}
        for name in self.models:
            data[f"{name}_predict"] = []
            data[f"{name}_resid"] = []
        by_record: dict[str, dict[str, ComparisonRow]] = {}
        for row in self.rows:
            by_record.setdefault(row.record, {})[row.model] = row
        for record in self.records:
            cells = by_record[record]
            data[self.response].append(next(iter(cells.values())).actual)
            for name in self.models:
                data[f"{name}_predict"].append(cells[name].predicted)
                data[f"{name}_resid"].append(cells[name].residual)
        return pd.DataFrame(data, index=pd.Index(list(self.records), name='record'))


def compare_models(
    models: Mapping[str, LinearSolution],
    data: Any,
    response: str | None = None,
) -> ComparisonTable:
    """
    Predict data under each model and tabulate predictions and residuals.

    Args:
        models: Label -> fitted model; label order is kept
        data: Records to compare on (usually the test split). Must hold
            the response and every predictor used by any model.
        response: Response column. Defaults to the models' common response.

    Returns:
        ComparisonTable with one row per (record, model)

    Raises:
        ValidationError: If no models are given, their responses differ,
            or data has duplicated row labels
        UnknownFieldError: If data lacks the response or a predictor
    """
    if not models:
        raise ValidationError("models: need at least one model to compare")

    labels = tuple(str(name) for name in models)
    responses = {m.response for m in models.values()}
    if response is None:
        if len(responses) > 1:
            raise ValidationError(
                f"models: fitted to different responses {sorted(responses)}; "
                f"pass response= explicitly"
            )
        response = next(iter(responses))

    ds = as_datasource(data)
    actual = ds[response]
    records = ds.row_names
    if len(set(records)) != len(records):
        dupes = sorted(r for r, count in Counter(records).items() if count > 1)
        raise ValidationError(
            f"data: row labels must be unique to identify records; duplicated: {dupes}"
        )

    predicted = {label: model.predict(ds).fit for label, model in zip(labels, models.values())}

    rows = []
    for i, record in enumerate(records):
        y = float(actual[i])
        for label in labels:
            y_hat = float(predicted[label][i])
            rows.append(ComparisonRow(
                record=record,
                model=label,
                actual=y,
                predicted=y_hat,
                residual=y - y_hat,
            ))

    return ComparisonTable(
        rows=tuple(rows),
        models=labels,
        records=records,
        response=response,
    )


def _summarize(model: str, residuals: np.ndarray) -> ResidualSummary:
    q1, median, q3 = np.quantile(residuals, [0.25, 0.5, 0.75])
    iqr = q3 - q1
    low_fence = q1 - WHISKER_COEF * iqr
    high_fence = q3 + WHISKER_COEF * iqr
    inside = residuals[(residuals >= low_fence) & (residuals <= high_fence)]
    outliers = residuals[(residuals < low_fence) | (residuals > high_fence)]

    return ResidualSummary(
        model=model,
        n=int(residuals.size),
        mean=float(np.mean(residuals)),
        rmse=float(np.sqrt(np.mean(residuals ** 2))),
        mae=float(np.mean(np.abs(residuals))),
        minimum=float(np.min(residuals)),
        q1=float(q1),
        median=float(median),
        q3=float(q3),
        maximum=float(np.max(residuals)),
        lower_whisker=float(np.min(inside)),
        upper_whisker=float(np.max(inside)),
        outliers=tuple(float(v) for v in np.sort(outliers)),
    )
