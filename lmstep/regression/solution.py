"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from lmstep.core.result import Result
from lmstep.core.compute.distributions import t_two_sided_p, t_critical, f_upper_p
from lmstep.core.exceptions import UnknownFieldError

if TYPE_CHECKING:
    from lmstep.regression.design import RegressionDesign
    from lmstep.regression.prediction import PredictionSolution


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    unscaled_covariance: NDArray[np.floating[Any]]   # (X'X)^-1
    rss: float
    tss: float
    rank: int
    df_residual: int


@dataclass(frozen=True)
class CoefficientRow:
    """One row of the coefficient table."""
    term: str
    estimate: float
    std_error: float
    t_value: float
    p_value: float


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides convenient accessors for all
    regression outputs: coefficients with standard errors, t and p values,
    goodness of fit, the overall F test and AIC.
    """
    _result: Result[LinearParams]
    _design: 'RegressionDesign'

    # Cached computations
    _standard_errors: NDArray[np.floating[Any]] | None = None
    _t_statistics: NDArray[np.floating[Any]] | None = None

    # === Terms ===

    @property
    def response(self) -> str:
        return self._design.response

    @property
    def predictors(self) -> tuple[str, ...]:
        """Predictor names, without the intercept."""
        return self._design.predictors

    @property
    def coef_names(self) -> tuple[str, ...]:
        """'(Intercept)' followed by the predictors."""
        return self._design.column_names

    @property
    def design(self) -> 'RegressionDesign':
        return self._design

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def p(self) -> int:
        """Number of estimated coefficients, intercept included."""
        return self._design.p

    # === Estimates ===

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def intercept(self) -> float:
        return float(self.coefficients[0])

    def coefficient(self, name: str) -> float:
        """Coefficient for a named term ('(Intercept)' or a predictor)."""
        try:
            j = self.coef_names.index(name)
        except ValueError:
            raise UnknownFieldError(
                f"model has no term {name!r}. Terms: {list(self.coef_names)}",
                field=name,
                available=self.coef_names,
            ) from None
        return float(self.coefficients[j])

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def unscaled_covariance(self) -> NDArray[np.floating[Any]]:
        """(X'X)^-1, in coefficient order."""
        return self._result.params.unscaled_covariance

    # === Goodness of fit ===

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def r_squared(self) -> float:
        """
        Multiple R-squared.

        0 for the intercept-only model, as in summary.lm().
        """
        if self.p == 1:
            return 0.0
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)

    @property
    def adjusted_r_squared(self) -> float:
        if self.p == 1:
            return 0.0
        n, p = self.n, self.p
        return 1.0 - (1.0 - self.r_squared) * (n - 1) / (n - p)

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def sigma_squared(self) -> float:
        """Residual variance RSS / df."""
        return self.rss / self.df_residual

    @property
    def residual_std_error(self) -> float:
        return float(np.sqrt(self.sigma_squared))

    @property
    def f_statistic(self) -> float | None:
        """
        Overall F statistic against the intercept-only model.

        None for the intercept-only model itself.
        """
        if self.p == 1:
            return None
        df_model = self.p - 1
        explained = (self.tss - self.rss) / df_model
        if self.rss == 0:
            return float('inf')
        return float(explained / self.sigma_squared)

    @property
    def f_df(self) -> tuple[int, int] | None:
        """Numerator and denominator degrees of freedom of the F test."""
        if self.p == 1:
            return None
        return (self.p - 1, self.df_residual)

    @property
    def f_p_value(self) -> float | None:
        f = self.f_statistic
        if f is None:
            return None
        return f_upper_p(f, self.p - 1, self.df_residual)

    def extract_aic(self, k: float = 2.0) -> float:
        """
        AIC in the form used for stepwise selection (R's extractAIC).

        n * log(RSS / n) + k * p, with p counting the intercept. An exact
        fit (RSS = 0) scores -inf.
        """
        n = self.n
        with np.errstate(divide='ignore'):
            log_rss = np.log(self.rss / n)
        return float(n * log_rss + k * self.p)

    @property
    def aic(self) -> float:
        return self.extract_aic(k=2.0)

    # === Inference ===

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """
        Standard errors of coefficients.

        Computed as SE(β) = sqrt(diag(σ² (X'X)⁻¹))
        """
        if self._standard_errors is not None:
            return self._standard_errors

        diag = np.diag(self.unscaled_covariance)
        self._standard_errors = np.sqrt(self.sigma_squared * diag)
        return self._standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        """t-statistics for coefficients."""
        if self._t_statistics is not None:
            return self._t_statistics

        se = self.standard_errors
        with np.errstate(divide='ignore', invalid='ignore'):
            t = self.coefficients / se
            # A perfect fit gives se == 0; keep that visible as NaN, not inf
            t = np.where(np.isfinite(t), t, np.nan)
        self._t_statistics = t
        return self._t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values for the t-statistics."""
        return t_two_sided_p(self.t_statistics, self.df_residual)

    def vcov(self) -> NDArray[np.floating[Any]]:
        """Estimated covariance matrix of the coefficients, σ² (X'X)⁻¹."""
        return self.sigma_squared * self.unscaled_covariance

    def conf_int(self, level: float = 0.95) -> NDArray[np.floating[Any]]:
        """
        Confidence intervals for the coefficients (R's confint).

        Returns:
            (p x 2) array of lower and upper bounds, in coefficient order
        """
        q = t_critical(level, self.df_residual)
        half = q * self.standard_errors
        return np.column_stack([self.coefficients - half, self.coefficients + half])

    def coef_table(self) -> tuple[CoefficientRow, ...]:
        """Coefficient table: estimate, std. error, t value, Pr(>|t|)."""
        return tuple(
            CoefficientRow(
                term=name,
                estimate=float(b),
                std_error=float(se),
                t_value=float(t),
                p_value=float(pv),
            )
            for name, b, se, t, pv in zip(
                self.coef_names, self.coefficients, self.standard_errors,
                self.t_statistics, self.p_values,
            )
        )

    # === Prediction ===

    def predict(
        self,
        data: Any,
        confidence_level: float | None = None,
    ) -> 'PredictionSolution':
        """Shortcut for lmstep.regression.predict(self, data, confidence_level)."""
        from lmstep.regression.prediction import predict
        return predict(self, data, confidence_level=confidence_level)

    # === Envelope ===

    @property
    def rank(self) -> int:
        return self._result.params.rank

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

    @property
    def provenance(self) -> dict[str, str]:
        return self._result.provenance

    def formula(self) -> str:
        """Model formula in R notation, e.g. 'mpg ~ wt + cyl'."""
        rhs = " + ".join(self.predictors) if self.predictors else "1"
        return f"{self.response} ~ {rhs}"

    def summary(self) -> str:
        """Generate R-style summary output."""
        lines = [
            "Linear Regression Results",
            "=" * 72,
            f"Formula: {self.formula()}",
            f"Observations: {self.n}",
            "",
            "Residuals:",
            _residual_quantiles_line(self.residuals),
            "",
            "Coefficients:",
            "-" * 72,
            f"{'':<16} {'Estimate':>12} {'Std. Error':>12} {'t value':>10} {'Pr(>|t|)':>12}",
            "-" * 72,
        ]

        for row in self.coef_table():
            t_str = f"{row.t_value:10.3f}" if not np.isnan(row.t_value) else "        NA"
            p_str = f"{row.p_value:12.4g}" if not np.isnan(row.p_value) else "          NA"
            sig = _significance_stars(row.p_value)
            lines.append(
                f"{row.term:<16} {row.estimate:12.6f} {row.std_error:12.6f} "
                f"{t_str} {p_str} {sig}"
            )

        lines.append("-" * 72)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        lines.append("")
        lines.append(
            f"Residual standard error: {self.residual_std_error:.4f} "
            f"on {self.df_residual} degrees of freedom"
        )
        if self.f_statistic is not None:
            df1, df2 = self.f_df
            lines.append(
                f"Multiple R-squared: {self.r_squared:.4f},\t"
                f"Adjusted R-squared: {self.adjusted_r_squared:.4f}"
            )
            lines.append(
                f"F-statistic: {self.f_statistic:.4f} on {df1} and {df2} DF,  "
                f"p-value: {self.f_p_value:.4g}"
            )
        lines.append(f"AIC: {self.aic:.4f}")
        lines.append(f"Backend: {self.backend_name}")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution({self.formula()!r}, n={self.n}, "
            f"r_squared={self.r_squared:.4f}, aic={self.aic:.4f})"
        )


def _residual_quantiles_line(residuals: NDArray[np.floating[Any]]) -> str:
    q = np.quantile(residuals, [0.0, 0.25, 0.5, 0.75, 1.0])
    labels = ("Min", "1Q", "Median", "3Q", "Max")
    return "  ".join(f"{label}: {value:.4f}" for label, value in zip(labels, q))


def _significance_stars(p: float) -> str:
    if np.isnan(p):
        return ''
    if p < 0.001:
        return '***'
    if p < 0.01:
        return '**'
    if p < 0.05:
        return '*'
    if p < 0.1:
        return '.'
    return ''
