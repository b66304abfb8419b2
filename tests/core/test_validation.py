"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_consistent_length: multi-array length matching
    - check_residual_df: positive residual degrees of freedom
    - check_probability: open unit interval
    - check_unique_names: column name lists
"""

import numpy as np
import pytest

from lmstep.core.exceptions import DimensionError, InsufficientDataError, ValidationError
from lmstep.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_ndim,
    check_probability,
    check_residual_df,
    check_unique_names,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts columns to float arrays and rejects non-numeric data."""

    @pytest.mark.parametrize("values", [
        [6, 4, 8],
        np.array([6, 4, 8], dtype=np.int32),
        np.array([6, 4, 8], dtype=np.uint8),
    ])
    def test_integers_become_float64(self, values):
        result = check_array(values, "cyl")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [6.0, 4.0, 8.0])

    def test_float32_kept_floating(self):
        result = check_array(np.array([2.62, 2.875], dtype=np.float32), "wt")
        assert result.dtype == np.float32

    def test_bool_promoted_to_float(self):
        """Binary indicators (am, vs) are valid predictors."""
        result = check_array([True, False, True], "am")
        np.testing.assert_array_equal(result, [1.0, 0.0, 1.0])

    def test_nested_list_to_2d(self):
        assert check_array([[1, 2], [3, 4]], "X").shape == (2, 2)

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="mpg: converted to object dtype"):
            check_array([None, 21.0, 22.8], "mpg")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="model: non-numeric dtype"):
            check_array(["Mazda RX4", "Datsun 710"], "model")

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValidationError, match="X"):
            check_array([[1.0, 2.0], [3.0]], "X")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:
    """check_finite counts NaN and Inf separately."""

    def test_finite_passes(self):
        check_finite(np.array([[1.0, 2.0], [3.0, 4.0]]), "X")

    def test_counts_reported(self):
        with pytest.raises(ValidationError, match=r"hp: contains non-finite values \(2 NaN, 1 Inf\)"):
            check_finite(np.array([np.nan, -np.inf, np.nan, 110.0]), "hp")


# ═══════════════════════════════════════════════════════════════════════
# check_ndim / check_1d / check_2d
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:
    """check_ndim, check_1d, check_2d enforce dimensionality."""

    def test_matching_ndim_passes(self):
        check_ndim(np.zeros(3), 1, "y")
        check_1d(np.zeros(3), "y")
        check_2d(np.zeros((3, 2)), "X")

    def test_message_has_shape(self):
        with pytest.raises(DimensionError, match=r"y: expected 1D array, got 2D with shape \(3, 2\)"):
            check_1d(np.ones((3, 2)), "y")

    @pytest.mark.parametrize("shape", [(3,), (2, 3, 4)])
    def test_check_2d_rejects(self, shape):
        with pytest.raises(DimensionError):
            check_2d(np.ones(shape), "X")


# ═══════════════════════════════════════════════════════════════════════
# check_consistent_length
# ═══════════════════════════════════════════════════════════════════════


class TestCheckConsistentLength:
    """check_consistent_length compares first dimensions."""

    def test_matching_lengths(self):
        check_consistent_length(np.zeros((4, 2)), np.zeros(4), names=("X", "mpg"))

    def test_single_array(self):
        check_consistent_length(np.zeros(4), names=("mpg",))

    def test_mismatch_lists_lengths(self):
        with pytest.raises(DimensionError, match="X=4, mpg=3"):
            check_consistent_length(np.zeros((4, 2)), np.zeros(3), names=("X", "mpg"))

    def test_names_must_match_arrays(self):
        with pytest.raises(ValueError, match="must match number of names"):
            check_consistent_length(np.zeros(4), np.zeros(4), names=("X",))


# ═══════════════════════════════════════════════════════════════════════
# check_residual_df
# ═══════════════════════════════════════════════════════════════════════


class TestCheckResidualDf:
    """check_residual_df requires n > number of parameters."""

    def test_positive_df_passes(self):
        check_residual_df(10, 3, "fit")

    def test_one_df_passes(self):
        check_residual_df(5, 4, "fit")

    def test_zero_df_raises(self):
        with pytest.raises(InsufficientDataError, match="residual df = 0"):
            check_residual_df(5, 5, "fit")

    def test_negative_df_raises(self):
        with pytest.raises(InsufficientDataError) as exc_info:
            check_residual_df(4, 5, "fit")
        assert exc_info.value.n_observations == 4
        assert exc_info.value.n_parameters == 5

    def test_is_validation_error(self):
        with pytest.raises(ValidationError):
            check_residual_df(1, 1, "fit")


# ═══════════════════════════════════════════════════════════════════════
# check_probability
# ═══════════════════════════════════════════════════════════════════════


class TestCheckProbability:
    """check_probability accepts only the open interval (0, 1)."""

    def test_inside_passes(self):
        assert check_probability(0.8, "train_fraction") == 0.8

    def test_numpy_scalar_converted(self):
        assert isinstance(check_probability(np.float32(0.5), "level"), float)

    @pytest.mark.parametrize("value", [0.0, 1.0, -0.1, 1.5, float('nan')])
    def test_outside_raises(self, value):
        with pytest.raises(ValidationError, match="must be in"):
            check_probability(value, "train_fraction")

    def test_non_number_raises(self):
        with pytest.raises(ValidationError, match="expected a number"):
            check_probability("high", "level")


# ═══════════════════════════════════════════════════════════════════════
# check_unique_names
# ═══════════════════════════════════════════════════════════════════════


class TestCheckUniqueNames:
    """check_unique_names validates column-name sequences."""

    def test_returns_tuple_in_order(self):
        assert check_unique_names(['wt', 'cyl'], "predictors") == ('wt', 'cyl')

    def test_empty_allowed(self):
        assert check_unique_names([], "predictors") == ()

    def test_duplicates_raise(self):
        with pytest.raises(ValidationError, match=r"duplicate column names \['wt'\]"):
            check_unique_names(['wt', 'cyl', 'wt'], "predictors")

    def test_bare_string_rejected(self):
        """A single string is almost always a forgotten list."""
        with pytest.raises(ValidationError, match="sequence of column names"):
            check_unique_names('wt', "predictors")

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError, match="must be strings"):
            check_unique_names(['wt', 3], "predictors")
