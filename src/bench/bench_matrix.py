"""
Benchmark script for the Matrix kernels.
Times transpose on a cold and a warm cache, and Matrix multiply against
the NumPy (BLAS) and Numba references.
"""

import sys
import os
import time
from pathlib import Path

# Set thread limits BEFORE importing NumPy to prevent BLAS thread contention
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"
os.environ["OPENBLAS_NUM_THREADS"] = "1"
os.environ["NUMEXPR_NUM_THREADS"] = "1"

import numpy as np
import pandas as pd

# Add project root to path (two levels up from this file)
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.kernels.matrix import Matrix
from src.kernels.matrix_numpy import to_numpy, verify_correctness
from src.kernels.matmul_numba import matmul_numba


def _latency_stats(times):
    times = np.array(times)
    return {
        'latency_ms': np.median(times) * 1000,
        'latency_p50_ms': np.percentile(times, 50) * 1000,
        'latency_p95_ms': np.percentile(times, 95) * 1000,
        'latency_p99_ms': np.percentile(times, 99) * 1000,
    }


def _time_runs(fn, num_runs, setup=None):
    times = []
    for _ in range(num_runs):
        if setup is not None:
            setup()
        t_start = time.perf_counter()
        fn()
        t_end = time.perf_counter()
        times.append(t_end - t_start)
    return times


def benchmark_transpose(shapes, num_runs=10):
    """
    Benchmark Matrix.transpose on a cache miss and a cache hit.

    Args:
        shapes: List of tuples (M, N) representing matrix dimensions
        num_runs: Number of timed runs

    Returns:
        DataFrame with one row per (shape, cache state)
    """
    results = []

    for M, N in shapes:
        print(f"\nBenchmarking transpose: M={M}, N={N}")
        np.random.seed(42)
        m = Matrix.from_numpy(np.random.randn(M, N))

        # Cold: touching a row through the writable accessor drops the cache
        cold = _time_runs(m.transpose, num_runs, setup=lambda: m.at_mut(0))
        results.append({'kernel': 'transpose', 'cache': 'miss', 'M': M, 'N': N,
                        **_latency_stats(cold)})

        m.transpose()
        warm = _time_runs(m.transpose, num_runs)
        results.append({'kernel': 'transpose', 'cache': 'hit', 'M': M, 'N': N,
                        **_latency_stats(warm)})

    return pd.DataFrame(results)


def benchmark_multiply(configs, num_warmup=3, num_runs=10):
    """
    Benchmark matrix multiplication kernels.

    Args:
        configs: List of tuples (M, K, N) representing matrix dimensions
        num_warmup: Number of warmup runs (covers Numba JIT compilation)
        num_runs: Number of timed runs

    Returns:
        DataFrame with benchmark results
    """
    results = []

    for M, K, N in configs:
        print(f"\nBenchmarking multiply: M={M}, K={K}, N={N}")

        np.random.seed(42)
        A_np = np.ascontiguousarray(np.random.randn(M, K), dtype=np.float64)
        B_np = np.ascontiguousarray(np.random.randn(K, N), dtype=np.float64)
        A = Matrix.from_numpy(A_np)
        B = Matrix.from_numpy(B_np)

        flops = 2 * M * K * N
        base = {'M': M, 'K': K, 'N': N, 'flops': flops}

        # 1. Matrix (pure Python, transpose of B cached after the first run)
        print("  Testing Matrix (pure Python)...")
        try:
            C = A * B
            if not verify_correctness(A, B, C):
                raise AssertionError("Matrix correctness check failed")
            times = _time_runs(lambda: A * B, num_runs)
            results.append({'kernel': 'matrix', **base, **_latency_stats(times),
                            'throughput_gflops': (flops / 1e9) / np.median(times)})

            # Same product with the transpose cache dropped before each run
            times = _time_runs(lambda: A * B, num_runs, setup=lambda: B.at_mut(0))
            results.append({'kernel': 'matrix_cold', **base, **_latency_stats(times),
                            'throughput_gflops': (flops / 1e9) / np.median(times)})
        except Exception as e:
            print(f"    Error: {e}")

        # 2. NumPy
        print("  Testing NumPy (vectorized)...")
        try:
            for _ in range(num_warmup):
                _ = A_np @ B_np
            times = _time_runs(lambda: A_np @ B_np, num_runs)
            results.append({'kernel': 'numpy', **base, **_latency_stats(times),
                            'throughput_gflops': (flops / 1e9) / np.median(times)})
        except Exception as e:
            print(f"    Error: {e}")

        # 3. Numba, fed the transpose Matrix already cached for B
        print("  Testing Numba (JIT)...")
        try:
            BT_np = np.ascontiguousarray(to_numpy(B.transpose()), dtype=np.float64)
            for _ in range(num_warmup):
                _ = matmul_numba(A_np, BT_np)
            C_nb = matmul_numba(A_np, BT_np)
            if not np.allclose(C_nb, A_np @ B_np):
                raise AssertionError("Numba correctness check failed")
            times = _time_runs(lambda: matmul_numba(A_np, BT_np), num_runs)
            results.append({'kernel': 'numba', **base, **_latency_stats(times),
                            'throughput_gflops': (flops / 1e9) / np.median(times)})
        except Exception as e:
            print(f"    Error: {e}")

    return pd.DataFrame(results)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Benchmark Matrix kernels')
    parser.add_argument('--runs', type=int, default=10,
                        help='Number of timed runs per kernel')
    parser.add_argument('--max-dim', type=int, default=128,
                        help='Largest square dimension to benchmark')
    parser.add_argument('--output-dir', type=Path,
                        default=Path(__file__).parent.parent.parent / "results",
                        help='Directory for the CSV results')
    args = parser.parse_args()

    dims = [d for d in (16, 32, 64, 128, 256) if d <= args.max_dim]
    configs = [(d, d, d) for d in dims]
    shapes = [(d, d) for d in dims]

    print("=" * 70)
    print("Matrix Benchmark Suite - SINGLE-THREADED MODE")
    print("=" * 70)

    from numba import set_num_threads
    set_num_threads(1)

    df_mul = benchmark_multiply(configs, num_warmup=3, num_runs=args.runs)
    df_t = benchmark_transpose(shapes, num_runs=args.runs)

    args.output_dir.mkdir(exist_ok=True)
    mul_path = args.output_dir / "matrix_multiply_results.csv"
    t_path = args.output_dir / "matrix_transpose_results.csv"
    df_mul.to_csv(mul_path, index=False)
    df_t.to_csv(t_path, index=False)
    print(f"\nResults saved to: {mul_path}")
    print(f"Results saved to: {t_path}")

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(df_mul.to_string(index=False))
    print(df_t.to_string(index=False))
