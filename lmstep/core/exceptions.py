"""
Exception hierarchy for lmstep.

All exceptions inherit from LmStepError to allow catching any
library-specific error. Domain code raises the most specific class
that applies.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class LmStepError(Exception):
    """Base exception for all lmstep errors."""
    pass


class ValidationError(LmStepError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class UnknownFieldError(ValidationError, KeyError):
    """
    A requested column is not present in the data.

    Also a KeyError so that mapping-style lookups on a DataSource
    behave like dict lookups.

    Attributes:
        field: The missing column name
        available: Column names that do exist
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        available: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.field = field
        self.available = tuple(available)

    def __str__(self) -> str:
        # KeyError.__str__ quotes the message; keep it readable
        return str(self.args[0]) if self.args else ''


class InsufficientDataError(ValidationError):
    """
    Too few observations for the requested computation.

    Raised when a split or a fit would leave no residual degrees of
    freedom (n <= number of estimated parameters).

    Attributes:
        n_observations: Number of rows available
        n_parameters: Number of parameters that were to be estimated
    """

    def __init__(
        self,
        message: str,
        n_observations: int | None = None,
        n_parameters: int | None = None,
    ):
        super().__init__(message)
        self.n_observations = n_observations
        self.n_parameters = n_parameters


class NumericalError(LmStepError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DegenerateFitError(NumericalError):
    """
    Design matrix is singular or nearly singular.

    Raised when the predictors are collinear (or a predictor is constant
    alongside the intercept) so that X'X cannot be inverted reliably.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank
        expected_rank: Number of columns of the design matrix
        aliased: Column names found to be linearly dependent on the others
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        aliased: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank
        self.aliased = tuple(aliased)
