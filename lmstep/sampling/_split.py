"""
Reproducible train/test splitting.

This is a standalone utility function (no Design/Backend pipeline).
The split follows the convention of

    train <- sample(1:n, size = floor(fraction * n))
    test  <- df[-train, ]

training indices come out in permuted order, test indices in their
original ascending order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import math

import numpy as np
from numpy.typing import NDArray

from lmstep.core.datasource import DataSource, as_datasource
from lmstep.core.exceptions import ValidationError, InsufficientDataError
from lmstep.core.validation import check_probability

# Intercept-only model on the training rows must keep df = n - 1 > 0
MIN_TRAIN_ROWS = 2
MIN_TEST_ROWS = 1


@dataclass(frozen=True)
class SplitResult:
    """
    A partition of row positions [0, n) into training and test sets.

    Attributes:
        train_indices: Training row positions, in permuted order
        test_indices: Remaining row positions, ascending
        seed: Seed the permutation was drawn with
        train_fraction: Requested training share
        n: Number of rows partitioned
    """
    train_indices: NDArray[np.intp]
    test_indices: NDArray[np.intp]
    seed: int
    train_fraction: float
    n: int

    @property
    def n_train(self) -> int:
        return int(self.train_indices.size)

    @property
    def n_test(self) -> int:
        return int(self.test_indices.size)

    def train(self, data: Any) -> DataSource:
        """Training rows of data, in train_indices order."""
        return self._take(data, self.train_indices)

    def test(self, data: Any) -> DataSource:
        """Test rows of data, in test_indices order."""
        return self._take(data, self.test_indices)

    def _take(self, data: Any, indices: NDArray[np.intp]) -> DataSource:
        ds = as_datasource(data)
        if ds.n_observations != self.n:
            raise ValidationError(
                f"data: split was drawn for {self.n} rows, got {ds.n_observations}"
            )
        return ds.take(indices)

    def __repr__(self) -> str:
        return (
            f"SplitResult(n={self.n}, n_train={self.n_train}, "
            f"n_test={self.n_test}, seed={self.seed})"
        )


def train_test_split(
    data: Any,
    seed: int,
    train_fraction: float = 0.8,
) -> SplitResult:
    """
    Deterministically partition rows into training and test sets.

    Args:
        data: Tabular data (anything as_datasource() accepts) or a row count
        seed: Seed for numpy.random.default_rng
        train_fraction: Share of rows used for training, in (0, 1)

    Returns:
        SplitResult with floor(train_fraction * n) training rows

    Raises:
        ValidationError: If train_fraction is outside (0, 1) or seed is not an int
        InsufficientDataError: If fewer than 2 training rows or no test
            rows would result

    Example:
        >>> split = train_test_split(load_mtcars(), seed=100)
        >>> split.n_train, split.n_test
        (25, 7)
    """
    train_fraction = check_probability(train_fraction, 'train_fraction')
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise ValidationError(f"seed: expected an integer, got {seed!r}")

    n = _row_count(data)
    n_train = math.floor(train_fraction * n)
    n_test = n - n_train

    if n_train < MIN_TRAIN_ROWS or n_test < MIN_TEST_ROWS:
        raise InsufficientDataError(
            f"train_test_split: {n} rows with train_fraction={train_fraction} gives "
            f"{n_train} training and {n_test} test rows; need at least "
            f"{MIN_TRAIN_ROWS} training and {MIN_TEST_ROWS} test row(s)",
            n_observations=n_train,
            n_parameters=1,
        )

    rng = np.random.default_rng(seed)
    permutation = rng.permutation(n).astype(np.intp)
    train_indices = permutation[:n_train]
    test_indices = np.sort(permutation[n_train:])

    return SplitResult(
        train_indices=train_indices,
        test_indices=test_indices,
        seed=int(seed),
        train_fraction=train_fraction,
        n=n,
    )


def _row_count(data: Any) -> int:
    if isinstance(data, (int, np.integer)) and not isinstance(data, bool):
        n = int(data)
    else:
        n = as_datasource(data).n_observations
    if n < 1:
        raise ValidationError(f"data: need at least 1 row, got {n}")
    return n
