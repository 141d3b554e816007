import logging
from fractions import Fraction

import pytest

from src.kernels.matrix import Matrix
from src.kernels.matrix import multiply
from src.kernels.matrix_errors import DimensionMismatch
from src.kernels.matrix_errors import EmptyOperand
from src.kernels.matrix_errors import MatrixErrorKind


ROW = Matrix([[1, 2, 3]])
COLUMN = Matrix([[1], [2], [3]])
SQUARE = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


def test_chained_multiply() -> None:
    assert ROW * SQUARE * COLUMN == Matrix([[228]])


def test_chained_multiply_method_form() -> None:
    assert ROW.multiply(SQUARE).multiply(COLUMN) == Matrix([[228]])


def test_outer_product() -> None:
    assert COLUMN * ROW == Matrix([[1, 2, 3], [2, 4, 6], [3, 6, 9]])


def test_inner_product() -> None:
    assert multiply(ROW, COLUMN) == Matrix([[14]])


def test_matmul_operator() -> None:
    assert (SQUARE @ COLUMN) == (SQUARE * COLUMN) == Matrix([[14], [32], [50]])


def test_result_shape() -> None:
    a = Matrix(2, 3, 1)
    b = Matrix(3, 5, 1)

    c = a * b

    assert c.shape == (2, 5)
    assert c == Matrix(2, 5, 3)


def test_shape_associativity() -> None:
    a = Matrix([[1, 2, 3], [4, 5, 6]])
    b = Matrix([[1, 0, 2, 1], [0, 1, 1, 3], [2, 2, 0, 1]])
    c = Matrix([[1, 2], [3, 4], [5, 6], [7, 8]])

    left = (a * b) * c
    right = a * (b * c)

    assert left.shape == right.shape == (2, 2)
    assert left == right


def test_fraction_elements() -> None:
    a = Matrix([[Fraction(1, 2), Fraction(1, 3)]])
    b = Matrix([[Fraction(2)], [Fraction(3)]])

    assert a * b == Matrix([[Fraction(2)]])


def test_empty_left_operand() -> None:
    with pytest.raises(EmptyOperand) as excinfo:
        Matrix() * ROW

    assert excinfo.value.kind is MatrixErrorKind.EMPTY_OPERAND


def test_empty_right_operand() -> None:
    with pytest.raises(EmptyOperand):
        ROW * Matrix()


def test_empty_operand_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        multiply(Matrix(), Matrix())


def test_inner_dimension_mismatch_surfaces_from_dot() -> None:
    with pytest.raises(DimensionMismatch) as excinfo:
        ROW * ROW

    assert excinfo.value.expected == 3
    assert excinfo.value.actual == 1


def test_multiply_by_non_matrix() -> None:
    with pytest.raises(TypeError):
        ROW * 3  # type: ignore[operator]


def test_right_transpose_computed_once(caplog: pytest.LogCaptureFixture) -> None:
    a = Matrix(4, 3, 1)
    b = Matrix(3, 2, 2)
    caplog.set_level(logging.DEBUG, logger="src.kernels.matrix")

    a * b

    misses = [r for r in caplog.records if "cache miss" in r.getMessage()]
    hits = [r for r in caplog.records if "cache hit" in r.getMessage()]
    assert len(misses) == 1
    assert len(hits) == 3


def test_multiply_reuses_cached_transpose() -> None:
    a = Matrix([[1, 2]])
    b = Matrix([[1, 2], [3, 4]])
    b_T = b.transpose()

    a * b

    assert b.transpose() is b_T


def test_multiply_after_mutation_uses_fresh_transpose() -> None:
    a = Matrix([[1, 1]])
    b = Matrix([[1, 2], [3, 4]])
    assert a * b == Matrix([[4, 6]])

    b[1, 1] = 10

    assert a * b == Matrix([[4, 12]])


def test_multiply_does_not_mutate_operands() -> None:
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[5, 6], [7, 8]])

    a * b

    assert a == Matrix([[1, 2], [3, 4]])
    assert b == Matrix([[5, 6], [7, 8]])


def test_multiply_by_rows_without_columns() -> None:
    result = ROW * Matrix(3, 0)

    assert result.shape == (1, 0)
    assert result == Matrix(1, 0)


def test_multiply_by_rows_without_columns_skips_inner_dimension_check() -> None:
    # No dot product runs, so the 2 != 3 mismatch never surfaces
    result = Matrix([[1, 2]]) * Matrix(3, 0)

    assert result.shape == (1, 0)
