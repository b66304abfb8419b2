"""
Tests for the lmstep exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via LmStepError)
    - Diagnostic attributes on UnknownFieldError, InsufficientDataError,
      DegenerateFitError
    - UnknownFieldError doubles as a KeyError
    - Default attribute values
"""

import pytest

from lmstep.core.exceptions import (
    DegenerateFitError,
    DimensionError,
    InsufficientDataError,
    LmStepError,
    NumericalError,
    UnknownFieldError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via LmStepError."""

    def test_validation_error_is_lmstep_error(self):
        with pytest.raises(LmStepError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_unknown_field_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise UnknownFieldError("no column 'z'")

    def test_unknown_field_is_key_error(self):
        with pytest.raises(KeyError):
            raise UnknownFieldError("no column 'z'")

    def test_insufficient_data_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise InsufficientDataError("too few rows")

    def test_degenerate_fit_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise DegenerateFitError("collinear")

    def test_degenerate_fit_is_lmstep_error(self):
        with pytest.raises(LmStepError):
            raise DegenerateFitError("collinear")

    def test_degenerate_fit_is_not_validation_error(self):
        err = DegenerateFitError("collinear")
        assert not isinstance(err, ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# UnknownFieldError
# ═══════════════════════════════════════════════════════════════════════


class TestUnknownFieldError:
    """UnknownFieldError names the missing field and what was available."""

    def test_attributes(self):
        err = UnknownFieldError("no column 'z'", field='z', available=('x', 'y'))
        assert err.field == 'z'
        assert err.available == ('x', 'y')

    def test_message_not_quoted(self):
        """KeyError would repr-quote the message; we keep it plain."""
        err = UnknownFieldError("no column 'z'")
        assert str(err) == "no column 'z'"

    def test_defaults(self):
        err = UnknownFieldError("missing")
        assert err.field is None
        assert err.available == ()


# ═══════════════════════════════════════════════════════════════════════
# InsufficientDataError
# ═══════════════════════════════════════════════════════════════════════


class TestInsufficientDataError:

    def test_attributes(self):
        err = InsufficientDataError("4 rows, 5 parameters", n_observations=4, n_parameters=5)
        assert err.n_observations == 4
        assert err.n_parameters == 5
        assert "5 parameters" in str(err)

    def test_defaults_are_none(self):
        err = InsufficientDataError("too few")
        assert err.n_observations is None
        assert err.n_parameters is None


# ═══════════════════════════════════════════════════════════════════════
# DegenerateFitError
# ═══════════════════════════════════════════════════════════════════════


class TestDegenerateFitError:
    """DegenerateFitError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = DegenerateFitError(
            "X is rank-deficient",
            matrix_name="X",
            condition_number=float('inf'),
            rank=3,
            expected_rank=4,
            aliased=('x3',),
        )
        assert str(err) == "X is rank-deficient"
        assert err.matrix_name == "X"
        assert err.rank == 3
        assert err.expected_rank == 4
        assert err.aliased == ('x3',)

    def test_defaults(self):
        err = DegenerateFitError("singular")
        assert err.matrix_name is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None
        assert err.aliased == ()

    def test_catchable_with_attributes(self):
        with pytest.raises(DegenerateFitError) as exc_info:
            raise DegenerateFitError("singular", matrix_name="A", rank=1)
        assert exc_info.value.matrix_name == "A"
        assert exc_info.value.rank == 1
