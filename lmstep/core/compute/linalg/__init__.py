"""
Linear algebra kernels for lmstep.

All functions use SciPy/NumPy (LAPACK under the hood), return structured
results, and raise immediately with clear messages.

Submodules:
    qr: Column-pivoted QR, least-squares solve, unscaled covariance
"""

from lmstep.core.compute.linalg.qr import (
    QRResult,
    qr_decompose,
    qr_solve,
    require_full_rank,
    unscaled_covariance,
)

__all__ = [
    "QRResult",
    "qr_decompose",
    "qr_solve",
    "require_full_rank",
    "unscaled_covariance",
]
