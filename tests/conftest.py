"""
pytest configuration and shared fixtures.
"""

from dataclasses import dataclass

import pytest
import numpy as np

from lmstep import DataSource, load_mtcars


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Three predictors with known coefficients and small noise."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = rng.standard_normal(n)
    beta_true = np.array([0.5, 1.0, -2.0, 0.5])
    y = beta_true[0] + beta_true[1] * x1 + beta_true[2] * x2 + beta_true[3] * x3
    y = y + rng.standard_normal(n) * 0.1
    ds = DataSource.from_arrays(y=y, x1=x1, x2=x2, x3=x3)
    return ds, beta_true


@pytest.fixture
def line_data(rng):
    """25 rows of y = 3 - 2 * x1 with tiny noise."""
    n = 25
    x1 = rng.uniform(-5.0, 5.0, n)
    y = 3.0 - 2.0 * x1 + rng.standard_normal(n) * 1e-3
    return DataSource.from_arrays(y=y, x1=x1)


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail)."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2  # Perfect collinearity
    y = rng.standard_normal(n)
    return DataSource.from_arrays(y=y, x1=x1, x2=x2, x3=x3)


@pytest.fixture
def mtcars():
    """The full 32-car mtcars table."""
    return load_mtcars()


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str


# Exact arithmetic checks on well-conditioned problems
CPU_FP64 = ToleranceTier(rtol=1e-10, atol=1e-12, name='cpu_fp64')

# Reference values transcribed from printed R output (4-7 significant digits)
R_PRINTED = ToleranceTier(rtol=1e-4, atol=1e-3, name='r_printed')


@pytest.fixture
def cpu_tol():
    return CPU_FP64


@pytest.fixture
def r_tol():
    """pytest.approx keyword arguments for values quoted from R printouts."""
    return dict(rel=R_PRINTED.rtol, abs=R_PRINTED.atol)
