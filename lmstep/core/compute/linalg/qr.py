"""
QR decomposition and least-squares kernels.

Column-pivoted QR (LAPACK geqp3 via SciPy) gives a rank-revealing
factorization X P = Q R. Everything the fitter needs comes from it:
the numerical rank, the least-squares solution, and the unscaled
covariance (X'X)^-1 = P R^-1 R^-T P'.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sla

from lmstep.core.exceptions import DegenerateFitError
from lmstep.core.compute.tolerances import RANK_TOLERANCE


@dataclass(frozen=True)
class QRResult:
    """
    Result of a column-pivoted QR decomposition.

    Attributes:
        Q: Orthonormal columns (n x p)
        R: Upper triangular factor (p x p)
        pivot: Column permutation; X[:, pivot] = Q @ R
        independent: Per pivoted column, whether it adds a direction not
            already spanned by the columns before it
        tol: Relative tolerance used for the rank decision
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    pivot: NDArray[np.intp]
    independent: NDArray[np.bool_]
    tol: float

    @property
    def rank(self) -> int:
        """Numerical rank: number of independent columns."""
        return int(np.count_nonzero(self.independent))

    @property
    def n_columns(self) -> int:
        return self.R.shape[1]

    @property
    def is_full_rank(self) -> bool:
        return self.rank == self.n_columns

    @property
    def aliased(self) -> NDArray[np.intp]:
        """Original column indices that are linearly dependent on the rest."""
        return np.sort(self.pivot[~self.independent])

    def condition_number(self) -> float:
        """2-norm condition number of X (equal to that of R)."""
        if self.n_columns == 0:
            return 1.0
        if not self.is_full_rank:
            return float('inf')
        return float(np.linalg.cond(self.R))


def qr_decompose(
    X: NDArray[np.floating[Any]],
    tol: float = RANK_TOLERANCE,
) -> QRResult:
    """
    Column-pivoted economy QR decomposition.

    Args:
        X: Matrix to decompose (n x p), n >= p
        tol: Column j (in pivot order) counts towards the rank when
            |R_jj| > tol * ||X[:, pivot[j]]||, i.e. when what is left of the
            column after projecting out the earlier ones is not negligible
            next to its own length. Scaling a column leaves the decision
            unchanged.

    Returns:
        QRResult with Q, R, pivot and numerical rank
    """
    n, p = X.shape
    if p == 0:
        return QRResult(
            Q=np.empty((n, 0)), R=np.empty((0, 0)),
            pivot=np.empty(0, dtype=np.intp),
            independent=np.empty(0, dtype=np.bool_), tol=tol,
        )

    Q, R, pivot = sla.qr(X, mode='economic', pivoting=True)

    pivot = pivot.astype(np.intp)
    # |R_jj| is the norm of column pivot[j] orthogonal to the columns before it
    diag_R = np.abs(np.diag(R))
    col_norms = np.linalg.norm(X, axis=0)[pivot]
    independent = diag_R > tol * col_norms

    return QRResult(Q=Q, R=R, pivot=pivot, independent=independent, tol=tol)


def require_full_rank(
    qr_result: QRResult,
    column_names: tuple[str, ...] | None = None,
    matrix_name: str = 'X',
) -> None:
    """
    Raise DegenerateFitError unless the decomposed matrix has full column rank.

    Args:
        qr_result: Decomposition to check
        column_names: Names of the columns, for reporting aliased terms
        matrix_name: Name of the matrix in the error message
    """
    if qr_result.is_full_rank:
        return

    aliased_idx = qr_result.aliased.tolist()
    if column_names is not None:
        aliased = tuple(column_names[i] for i in aliased_idx)
    else:
        aliased = tuple(str(i) for i in aliased_idx)

    p = qr_result.n_columns
    raise DegenerateFitError(
        f"Design matrix {matrix_name} is rank-deficient: rank={qr_result.rank}, "
        f"expected={p}. Collinear or constant columns: {list(aliased)}.",
        matrix_name=matrix_name,
        condition_number=qr_result.condition_number(),
        rank=qr_result.rank,
        expected_rank=p,
        aliased=aliased,
    )


def qr_solve(
    qr_result: QRResult,
    y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Least-squares coefficients from a full-rank pivoted QR.

    Solves R z = Q'y by back substitution and undoes the pivoting,
    so the returned β is in the original column order.
    """
    p = qr_result.n_columns
    beta = np.empty(p, dtype=np.float64)
    if p == 0:
        return beta
    z = sla.solve_triangular(qr_result.R, qr_result.Q.T @ y, lower=False)
    beta[qr_result.pivot] = z
    return beta


def unscaled_covariance(qr_result: QRResult) -> NDArray[np.floating[Any]]:
    """
    (X'X)^-1 from a full-rank pivoted QR, in original column order.

    Computed as R^-1 R^-T (R's chol2inv on the QR factor), which never
    forms X'X explicitly.
    """
    p = qr_result.n_columns
    if p == 0:
        return np.empty((0, 0), dtype=np.float64)
    R_inv = sla.solve_triangular(qr_result.R, np.eye(p), lower=False)
    cov_pivoted = R_inv @ R_inv.T
    cov = np.empty_like(cov_pivoted)
    piv = qr_result.pivot
    cov[np.ix_(piv, piv)] = cov_pivoted
    return cov
