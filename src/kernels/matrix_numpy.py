"""
NumPy interop for Matrix.
Provides conversion to ndarray and a BLAS-backed reference product used to
check the pure Python kernels.
"""

import numpy as np

from src.kernels.matrix import Matrix


def to_numpy(m, dtype=None):
    """
    Convert a Matrix to a 2-D numpy array.

    Args:
        m: Matrix to convert
        dtype: Optional numpy dtype (inferred from the elements when omitted)

    Returns:
        numpy array of shape (m.rows(), m.cols())
    """
    if m.rows() == 0:
        return np.zeros((0, 0), dtype=dtype if dtype is not None else np.float64)
    return np.array(m.to_list(), dtype=dtype)


def matmul_numpy(m1, m2):
    """
    Compute m1 * m2 using the @ operator on numpy arrays.

    Returns:
        Matrix holding the numpy product converted back to Python scalars
    """
    return Matrix.from_numpy(to_numpy(m1) @ to_numpy(m2))


def verify_correctness(m1, m2, result, rtol=1e-5):
    """Verify that result matches m1 @ m2 (numpy reference implementation)."""
    C_ref = to_numpy(m1) @ to_numpy(m2)
    C = to_numpy(result)
    if C.shape != C_ref.shape:
        return False
    return np.allclose(C, C_ref, rtol=rtol)


if __name__ == "__main__":
    np.random.seed(42)
    M, K, N = 16, 32, 8
    A = Matrix.from_numpy(np.random.randn(M, K))
    B = Matrix.from_numpy(np.random.randn(K, N))

    print("Running Matrix multiply against NumPy reference...")
    C = A * B

    if verify_correctness(A, B, C):
        print("Correctness check passed!")
    else:
        print("Correctness check failed!")
