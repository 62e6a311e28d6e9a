"""
Exception hierarchy for comparemeans.

All exceptions inherit from CompareMeansError to allow catching any
library-specific error. Degenerate statistics (empty groups, zero spread)
are not errors: calculators report them in their metadata instead.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Only malformed requests raise; the task router converts every
      exception into an error response
"""


class CompareMeansError(Exception):
    """Base exception for all comparemeans errors."""
    pass


class ValidationError(CompareMeansError):
    """
    Input validation failed.

    Raised when a request, variable descriptor, data column, or option
    mapping is malformed (missing required field, wrong type, bad value).
    """
    pass


class DimensionError(ValidationError):
    """
    Data columns have inconsistent or unusable shapes.

    Raised when a column is not a flat sequence of cell values.
    """
    pass


class InvalidAnalysisType(ValidationError):
    """
    An analysis-type identifier has no registered calculator.

    Fatal for the whole request: the router aborts before computing
    anything.

    Attributes:
        analysis_type: The offending identifier
        available: Identifiers the registry does know about
    """

    def __init__(
        self,
        analysis_type: str,
        available: tuple[str, ...] = (),
    ):
        message = f"Invalid analysis type: {analysis_type!r}"
        if available:
            message += f". Available: {', '.join(available)}"
        super().__init__(message)
        self.analysis_type = analysis_type
        self.available = available


class NumericalError(CompareMeansError):
    """
    Numerical computation failed.

    Raised when a distribution function returns a non-finite value for
    inputs that should have been well-defined.

    Attributes:
        function: Name of the distribution function that failed
    """

    def __init__(self, message: str, function: str | None = None):
        super().__init__(message)
        self.function = function
