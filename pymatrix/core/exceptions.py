"""
Exception hierarchy for pymatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Two disjoint families live underneath it:

    ValidationError: precondition violations (bad shapes, bad indices,
        unsupported element types). These are programming errors at the
        call site and are never recovered from inside the library.
    NumericalError: failures reported by the numeric backend while
        factorizing or solving. These are recoverable from the caller's
        point of view and carry the backend status verbatim.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages name the failing operation and the offending index
    - Never catch and re-raise with less information
"""


class PyMatrixError(Exception):
    """Base exception for all pymatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or incompatible.

    Raised when operand shapes don't satisfy an operation's contract
    (equal shapes for addition, inner dimensions for multiplication,
    square matrices for inversion) or when operand element types differ.
    """
    pass


class MatrixIndexError(ValidationError, IndexError):
    """
    Element, row or column index out of bounds.

    Also an IndexError so that generic sequence handling keeps working.
    """
    pass


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class LinearAlgebraError(NumericalError):
    """
    The numeric backend reported a nonzero status.

    Attributes:
        operation: Name of the public operation that failed ('invert', 'solve')
        status: Raw backend status code (LAPACK info convention)
    """

    def __init__(
        self,
        message: str,
        operation: str,
        status: int,
    ):
        super().__init__(message)
        self.operation = operation
        self.status = status


class NotInvertibleError(LinearAlgebraError):
    """
    Matrix is singular and has no inverse.

    Attributes:
        pivot: 1-based index of the exactly-zero pivot, if the backend
               reported one (positive status), otherwise None
    """

    def __init__(
        self,
        message: str,
        operation: str = 'invert',
        status: int = 0,
        pivot: int | None = None,
    ):
        super().__init__(message, operation=operation, status=status)
        self.pivot = pivot


class IllegalArgumentError(LinearAlgebraError):
    """
    An argument handed to the backend violated its preconditions.

    Attributes:
        argument_index: 1-based position of the offending argument
                        (magnitude of the negative backend status)
        column: Right-hand-side column being solved, if any
    """

    def __init__(
        self,
        message: str,
        argument_index: int,
        operation: str = 'solve',
        column: int | None = None,
    ):
        super().__init__(message, operation=operation, status=-argument_index)
        self.argument_index = argument_index
        self.column = column


class EquationUnsolvedError(LinearAlgebraError):
    """
    Factorization completed but the system is exactly singular.

    Attributes:
        equation: 1-based pivot position U(i, i) found to be zero
        column: Right-hand-side column being solved, if any
    """

    def __init__(
        self,
        message: str,
        equation: int,
        operation: str = 'solve',
        column: int | None = None,
    ):
        super().__init__(message, operation=operation, status=equation)
        self.equation = equation
        self.column = column
