"""
Numba JIT rendition of the row-by-row multiply used by Matrix.
Used as a benchmark reference only: the caller supplies B already
transposed (BT), exactly what Matrix gets from its transpose cache.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def matmul_numba(A, BT):
    """
    Compute C = A @ BT.T as dot products of rows of A with rows of BT.

    Args:
        A: numpy array of shape (M, K), dtype float64
        BT: numpy array of shape (N, K), dtype float64 (B transposed)

    Returns:
        C: numpy array of shape (M, N), dtype float64
    """
    M, K = A.shape
    N, K2 = BT.shape

    if K != K2:
        raise ValueError("Dimension mismatch: A.shape[1] != BT.shape[1]")

    C = np.zeros((M, N), dtype=np.float64)

    for i in range(M):
        for j in range(N):
            acc = 0.0
            # Summed left to right, same order as the pure Python dot
            for k in range(K):
                acc += A[i, k] * BT[j, k]
            C[i, j] = acc

    return C


if __name__ == "__main__":
    np.random.seed(42)
    M, K, N = 128, 256, 64
    A = np.ascontiguousarray(np.random.randn(M, K), dtype=np.float64)
    B = np.ascontiguousarray(np.random.randn(K, N), dtype=np.float64)
    BT = np.ascontiguousarray(B.T, dtype=np.float64)

    print("Running Numba matmul (row x transposed row)...")
    # Warmup
    _ = matmul_numba(A, BT)

    C = matmul_numba(A, BT)

    if np.allclose(C, A @ B):
        print("Correctness check passed!")
    else:
        print("Correctness check failed!")
        print(f"Max diff: {np.max(np.abs(C - A @ B)):.6e}")
