"""
Profiling script for the Matrix kernels.
Uses cProfile to show where multiply spends its time, and that the
transpose of the right operand is built only once per product.
"""

import sys
import cProfile
import pstats
from pathlib import Path
import numpy as np

# Add project root to path (two levels up from this file)
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.kernels.matrix import Matrix


def profile_multiply(M=64, K=128, N=64):
    """Profile Matrix multiply on a cold transpose cache."""
    print("Profiling Matrix multiply...")
    np.random.seed(42)
    A = Matrix.from_numpy(np.random.randn(M, K))
    B = Matrix.from_numpy(np.random.randn(K, N))

    profiler = cProfile.Profile()
    profiler.enable()
    A * B
    profiler.disable()

    stats = pstats.Stats(profiler)
    stats.sort_stats('cumulative')
    print("\nTop 10 functions by cumulative time:")
    stats.print_stats(10)

    return stats


def profile_transpose(M=256, N=256, calls=100):
    """Profile repeated transpose calls: one miss, the rest cache hits."""
    print("\nProfiling Matrix transpose...")
    np.random.seed(42)
    m = Matrix.from_numpy(np.random.randn(M, N))

    profiler = cProfile.Profile()
    profiler.enable()
    for _ in range(calls):
        m.transpose()
    profiler.disable()

    stats = pstats.Stats(profiler)
    stats.sort_stats('cumulative')
    print("\nTop 10 functions by cumulative time:")
    stats.print_stats(10)

    return stats


if __name__ == "__main__":
    print("=" * 60)
    print("Profiling Matrix Kernels")
    print("=" * 60)

    profile_multiply()
    profile_transpose()

    print("\n" + "=" * 60)
    print("Profiling complete!")
    print("=" * 60)
