import numpy as np
import pytest

from src.kernels.matmul_numba import matmul_numba
from src.kernels.matrix import Matrix
from src.kernels.matrix_numpy import matmul_numpy
from src.kernels.matrix_numpy import to_numpy
from src.kernels.matrix_numpy import verify_correctness


def test_to_numpy_shape_and_values() -> None:
    m = Matrix([[1, 2, 3], [4, 5, 6]])

    a = to_numpy(m, dtype=np.float64)

    assert a.shape == (2, 3)
    np.testing.assert_array_equal(a, [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


def test_to_numpy_empty() -> None:
    assert to_numpy(Matrix()).shape == (0, 0)


def test_from_numpy_gives_python_scalars() -> None:
    m = Matrix.from_numpy(np.array([[1.5, 2.5]]))

    assert m == Matrix([[1.5, 2.5]])
    assert type(m[0, 0]) is float


def test_from_numpy_rejects_non_2d() -> None:
    with pytest.raises(ValueError):
        Matrix.from_numpy(np.zeros(3))


def test_matmul_numpy_matches_matrix_multiply() -> None:
    a = Matrix([[1, 2, 3]])
    b = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])

    assert matmul_numpy(a, b) == a * b


def test_verify_correctness_random() -> None:
    rng = np.random.default_rng(42)
    a = Matrix.from_numpy(rng.standard_normal((6, 4)))
    b = Matrix.from_numpy(rng.standard_normal((4, 5)))

    assert verify_correctness(a, b, a * b)


def test_verify_correctness_detects_wrong_result() -> None:
    a = Matrix([[1, 2]])
    b = Matrix([[3], [4]])

    assert not verify_correctness(a, b, Matrix([[10]]))
    assert not verify_correctness(a, b, Matrix([[11, 0]]))


def test_numba_kernel_on_cached_transpose() -> None:
    rng = np.random.default_rng(7)
    A = rng.standard_normal((5, 3))
    B = rng.standard_normal((3, 4))
    b_T = Matrix.from_numpy(B).transpose()

    C = matmul_numba(np.ascontiguousarray(A), np.ascontiguousarray(to_numpy(b_T)))

    np.testing.assert_allclose(C, A @ B)


def test_numba_kernel_dimension_mismatch() -> None:
    with pytest.raises(ValueError):
        matmul_numba(np.ones((2, 3)), np.ones((2, 2)))
