"""
Dense row-major matrix with a memoized transpose.

Multiplication composes dot products of rows of the left operand with rows of
the right operand's transpose. The transpose is cached on the instance and
dropped the moment a writable row is handed out, so the cache is never stale.
"""

import io
import logging
import sys
from typing import Protocol, runtime_checkable

from src.kernels.dot import dot
from src.kernels.matrix_errors import DimensionMismatch, EmptyOperand, IndexOutOfRange

logger = logging.getLogger(__name__)


@runtime_checkable
class SupportsArithmetic(Protocol):
    """Capabilities required of matrix elements: +, * and textual rendering."""

    def __add__(self, other): ...

    def __mul__(self, other): ...

    def __str__(self) -> str: ...


def _check_rectangular(data):
    if not data:
        return
    cols = len(data[0])
    for row in data:
        if len(row) != cols:
            raise DimensionMismatch(cols, len(row))


def _check_capabilities(data):
    checked = set()
    for row in data:
        for item in row:
            item_type = type(item)
            if item_type in checked:
                continue
            if not isinstance(item, SupportsArithmetic):
                raise TypeError(
                    f"Matrix elements must support + and *, got {item_type.__name__}"
                )
            checked.add(item_type)


class Matrix:
    """
    A 2-dimensional matrix of elements supporting +, * and str().

    Construction:
        Matrix()                      empty 0x0 matrix
        Matrix(rows, cols, fill=0)    rows x cols matrix filled with `fill`
        Matrix([[1, 2], [3, 4]])      copy of nested sequence data (or another Matrix)

    Rows are copied on construction, so no caller-held list aliases the
    storage. The only way to mutate a matrix is through at_mut() (or
    m[i, j] = v, which goes through it), and that clears the cached transpose.

    Raises:
        DimensionMismatch: If the rows of `data` differ in length
        TypeError: If an element does not support + and *
    """

    __hash__ = None

    def __init__(self, data=None, cols=None, fill=0):
        self._transpose_cache = None
        # Matrix this instance is the cached transpose of, if any
        self._source = None

        if isinstance(data, int) and not isinstance(data, bool):
            if cols is None:
                raise TypeError("cols is required when constructing from a row count")
            if data < 0 or cols < 0:
                raise ValueError(f"Matrix dimensions must be non-negative, got {data}x{cols}")
            self._data = [[fill] * cols for _ in range(data)]
        elif data is None:
            if cols is not None:
                raise TypeError("cols given without a row count")
            self._data = []
        else:
            if cols is not None:
                raise TypeError("cols cannot be combined with literal data")
            self._data = [list(row) for row in data]

        _check_rectangular(self._data)
        _check_capabilities(self._data)

    @classmethod
    def filled(cls, rows, cols, fill=0):
        """Create a rows x cols matrix where every element equals `fill`."""
        return cls(rows, cols, fill)

    @classmethod
    def from_numpy(cls, array):
        """Create a matrix of Python scalars from a 2-D numpy array."""
        if getattr(array, "ndim", None) != 2:
            raise ValueError(f"Expected a 2-D array, got ndim={getattr(array, 'ndim', None)}")
        return cls(array.tolist())

    @classmethod
    def _from_rows(cls, rows):
        # Takes ownership of `rows` without copying or validation
        m = cls.__new__(cls)
        m._data = rows
        m._transpose_cache = None
        m._source = None
        return m

    def rows(self):
        """Number of rows."""
        return len(self._data)

    def cols(self):
        """Number of columns (length of the first row, 0 when there are no rows)."""
        return len(self._data[0]) if self._data else 0

    @property
    def shape(self):
        return (self.rows(), self.cols())

    def _check_index(self, i):
        if i < 0 or i >= len(self._data):
            raise IndexOutOfRange(i, len(self._data))

    def _check_column(self, j):
        cols = self.cols()
        if j < 0 or j >= cols:
            raise IndexOutOfRange(j, cols, axis="column")

    def at(self, i):
        """
        Return row i as an immutable tuple. Does not affect the transpose cache.

        Raises:
            IndexOutOfRange: If i is not a valid row index
        """
        self._check_index(i)
        return tuple(self._data[i])

    def at_mut(self, i):
        """
        Return row i as the live, writable list.

        The cached transpose is dropped unconditionally, whether or not the
        caller ends up writing to the row.

        Raises:
            IndexOutOfRange: If i is not a valid row index
        """
        self._check_index(i)
        self._invalidate()
        return self._data[i]

    def _invalidate(self):
        if self._transpose_cache is not None:
            logger.debug("Invalidating cached transpose of %dx%d matrix", *self.shape)
        self._transpose_cache = None

        # A cached transpose that gets edited no longer matches its source
        source = self._source
        if source is not None:
            if source._transpose_cache is self:
                logger.debug("Cached transpose edited, detaching from source")
                source._transpose_cache = None
            self._source = None

    def transpose(self):
        """
        Return the transpose of this matrix, computing it at most once per mutation.

        An empty matrix is its own transpose and is returned unchanged.

        Returns:
            Matrix of shape (cols, rows) with result[j][i] == self[i][j]
        """
        if self._transpose_cache is not None:
            logger.debug("Transpose cache hit for %dx%d matrix", *self.shape)
            return self._transpose_cache

        if not self._data:
            return self

        rows, cols = self.shape
        logger.debug("Transpose cache miss, computing %dx%d transpose", cols, rows)
        data_T = [[None] * rows for _ in range(cols)]
        for i in range(rows):
            row = self._data[i]
            for j in range(cols):
                data_T[j][i] = row[j]

        m_T = Matrix._from_rows(data_T)
        m_T._source = self
        self._transpose_cache = m_T
        return m_T

    @property
    def T(self):
        return self.transpose()

    def multiply(self, other):
        """Compute the product of this matrix with another."""
        return multiply(self, other)

    def __mul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return multiply(self, other)

    __matmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        # Element by element so that non-reflexive == (NaN) is honoured
        for row, other_row in zip(self._data, other._data):
            for x, y in zip(row, other_row):
                if not x == y:
                    return False
        return True

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        for row in self._data:
            yield tuple(row)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            i, j = key
            self._check_index(i)
            self._check_column(j)
            return self._data[i][j]
        return self.at(key)

    def __setitem__(self, key, value):
        if not isinstance(key, tuple):
            raise TypeError("Assign single elements with m[i, j] = value, or rows via at_mut(i)")
        i, j = key
        self._check_index(i)
        self._check_column(j)
        _check_capabilities([[value]])
        self.at_mut(i)[j] = value

    def to_list(self):
        """Return a copy of the elements as a list of lists."""
        return [list(row) for row in self._data]

    def print(self, out=None):
        """
        Print the contents of this matrix, one row per line, elements separated by a space.

        Args:
            out: Text stream to write to (defaults to sys.stdout)
        """
        if out is None:
            out = sys.stdout
        for row in self._data:
            out.write(" ".join(str(item) for item in row))
            out.write("\n")

    def __str__(self):
        buffer = io.StringIO()
        self.print(buffer)
        return buffer.getvalue()

    def __repr__(self):
        return f"Matrix({self._data!r})"


def multiply(m1, m2):
    """
    Compute the matrix product m1 * m2.

    Each result element is dot(row i of m1, row j of m2's transpose). The inner
    dimensions are not compared up front: a mismatch surfaces as a
    DimensionMismatch from the first dot product.

    Args:
        m1: Left matrix, shape (M, K)
        m2: Right matrix, shape (K, N)

    Returns:
        New matrix of shape (M, N)

    Raises:
        EmptyOperand: If either operand has zero rows
        DimensionMismatch: If m1.cols() != m2.rows()
    """
    if m1.rows() == 0 or m2.rows() == 0:
        raise EmptyOperand()

    result = []
    for i in range(m1.rows()):
        row = m1._data[i]
        # Memoized: computed once, then served from m2's cache
        m2_T = m2.transpose()
        result.append([dot(row, m2_T._data[j]) for j in range(m2.cols())])

    return Matrix._from_rows(result)


if __name__ == "__main__":
    a = Matrix([[1, 2, 3]])
    b = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    c = Matrix([[1], [2], [3]])

    print("Running chained multiply...")
    result = a * b * c
    result.print()

    if result == Matrix([[228]]):
        print("Correctness check passed!")
    else:
        print("Correctness check failed!")
