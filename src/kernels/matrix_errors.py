"""
Error kinds raised by the dense matrix kernels.
The set of kinds is closed: every failure is one of MatrixErrorKind.
"""

from enum import Enum


class MatrixErrorKind(Enum):
    DIMENSION_MISMATCH = "dimension_mismatch"
    EMPTY_OPERAND = "empty_operand"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


class MatrixError(Exception):
    """Base class for matrix kernel errors."""

    kind = None


class DimensionMismatch(MatrixError, ValueError):
    """
    Raised when two vectors (or a row and the expected row width) differ in length.

    Args:
        expected: Length of the first operand
        actual: Length of the second operand
    """

    kind = MatrixErrorKind.DIMENSION_MISMATCH

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid vector dimensions: {expected} != {actual}")


class EmptyOperand(MatrixError, ValueError):
    kind = MatrixErrorKind.EMPTY_OPERAND

    def __init__(self, message="Can't multiply matrix of size 0!"):
        super().__init__(message)


class IndexOutOfRange(MatrixError, IndexError):
    kind = MatrixErrorKind.INDEX_OUT_OF_RANGE

    def __init__(self, index, size, axis="row"):
        self.index = index
        self.size = size
        self.axis = axis
        super().__init__(f"{axis.capitalize()} index {index} out of range for matrix with {size} {axis}s")
