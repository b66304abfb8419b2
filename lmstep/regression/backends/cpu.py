"""
CPU reference backend for linear regression.

Uses column-pivoted QR decomposition via LAPACK (through SciPy) to solve
the least-squares problem. This is the reference implementation that
replicates R's lm() and summary.lm() behaviour on full-rank designs.
"""

from typing import Any
import numpy as np

from lmstep.core.result import Result
from lmstep.core.compute.timing import Timer
from lmstep.core.compute.tolerances import PERFECT_FIT_TOLERANCE
from lmstep.core.compute.linalg.qr import (
    qr_decompose,
    qr_solve,
    require_full_rank,
    unscaled_covariance,
)
from lmstep.regression.design import RegressionDesign
from lmstep.regression.solution import LinearParams


class CPUQRBackend:
    """
    CPU backend using pivoted QR decomposition.

    Takes a RegressionDesign and produces Result[LinearParams].
    Stateless; safe to reuse across fits.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS via QR decomposition.

        Algorithm:
            1. Compute pivoted QR decomposition: X P = QR
            2. Check numerical rank; refuse rank-deficient designs
            3. Solve: β = P R⁻¹ Q'y
            4. Compute residuals, fitted values, (X'X)⁻¹ and sums of squares

        Args:
            design: Validated regression design

        Returns:
            Result containing LinearParams

        Raises:
            DegenerateFitError: If X is rank-deficient
        """
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y
        n = design.n

        with timer.section('qr_decomposition'):
            qr_result = qr_decompose(X)

        require_full_rank(qr_result, column_names=design.column_names)

        with timer.section('solve'):
            coefficients = qr_solve(qr_result, y)

        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values

        with timer.section('statistics'):
            rss = float(residuals @ residuals)
            y_mean = np.mean(y)
            tss = float(np.sum((y - y_mean) ** 2))
            cov_unscaled = unscaled_covariance(qr_result)

        timer.stop()

        df_residual = n - qr_result.rank
        warnings: list[str] = []
        # summary.lm(): resvar < (mean(f)^2 + var(f)) * 1e-30
        fitted_var = float(np.var(fitted_values, ddof=1)) if n > 1 else 0.0
        scale = float(np.mean(fitted_values) ** 2) + fitted_var
        if rss / df_residual < scale * PERFECT_FIT_TOLERANCE:
            warnings.append("essentially perfect fit: summary may be unreliable")

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            unscaled_covariance=cov_unscaled,
            rss=rss,
            tss=tss,
            rank=qr_result.rank,
            df_residual=df_residual,
        )

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr_result.rank,
            'pivot': qr_result.pivot.tolist(),
            'condition_number': qr_result.condition_number(),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings),
        )
