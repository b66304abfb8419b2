"""
Input validation utilities for lmstep.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any, Iterable

from lmstep.core.exceptions import (
    ValidationError,
    DimensionError,
    InsufficientDataError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Booleans are numeric for our purposes (binary predictors)
    if result.dtype == np.bool_:
        result = result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_residual_df(n: int, n_parameters: int, name: str) -> None:
    """
    Verify a fit of n_parameters on n rows keeps positive residual df.

    Raises:
        InsufficientDataError: If n - n_parameters <= 0
    """
    if n - n_parameters <= 0:
        raise InsufficientDataError(
            f"{name}: {n} observations cannot support {n_parameters} parameters "
            f"(residual df = {n - n_parameters}, must be positive)",
            n_observations=n,
            n_parameters=n_parameters,
        )


def check_probability(value: float, name: str) -> float:
    """
    Verify value lies strictly inside (0, 1).

    Used for split fractions and confidence levels.

    Raises:
        ValidationError: If value is not a real number in the open interval
    """
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a number, got {value!r}") from e
    if not (0.0 < value < 1.0):
        raise ValidationError(f"{name}: must be in (0, 1), got {value}")
    return value


def check_unique_names(names: Iterable[str], name: str) -> tuple[str, ...]:
    """
    Verify a sequence of column names has no duplicates.

    Returns:
        The names as a tuple, order preserved

    Raises:
        ValidationError: If a name is repeated or is not a string
    """
    if isinstance(names, str):
        raise ValidationError(
            f"{name}: expected a sequence of column names, got the string {names!r}"
        )
    result = tuple(names)
    for item in result:
        if not isinstance(item, str):
            raise ValidationError(f"{name}: column names must be strings, got {item!r}")
    seen = set()
    duplicates = [x for x in result if x in seen or seen.add(x)]
    if duplicates:
        raise ValidationError(f"{name}: duplicate column names {sorted(set(duplicates))}")
    return result
