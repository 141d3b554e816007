"""
Utility script to plot Matrix benchmark results from CSV files.
Usage: python src/bench/plot_results.py
"""

import sys
import pandas as pd
import matplotlib.pyplot as plt
from pathlib import Path

# Add project root to path (two levels up from this file)
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

results_dir = Path(__file__).parent.parent.parent / "results"
plots_dir = results_dir / "plots"


def plot_multiply_results():
    """Plot multiply latency and throughput per kernel."""
    csv_path = results_dir / "matrix_multiply_results.csv"
    if not csv_path.exists():
        print(f"Results file not found: {csv_path}")
        return

    df = pd.read_csv(csv_path)

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    labels = {'matrix': 'Matrix (cached T)', 'matrix_cold': 'Matrix (cold T)',
              'numpy': 'NumPy', 'numba': 'Numba'}

    for kernel, label in labels.items():
        data = df[df['kernel'] == kernel]
        if data.empty:
            continue
        axes[0].semilogy(data['M'], data['latency_ms'], 'o-', label=label)
        axes[1].semilogy(data['M'], data['throughput_gflops'], 'o-', label=label)

    axes[0].set_xlabel('Matrix Dimension (M)')
    axes[0].set_ylabel('Latency (ms)')
    axes[0].set_title('Multiply Latency Comparison')
    axes[0].legend()
    axes[0].grid(True, alpha=0.3)

    axes[1].set_xlabel('Matrix Dimension (M)')
    axes[1].set_ylabel('Throughput (GFLOPS)')
    axes[1].set_title('Multiply Throughput Comparison')
    axes[1].legend()
    axes[1].grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(plots_dir / "matrix_multiply_results.png", dpi=150)
    print(f"Saved plot: {plots_dir / 'matrix_multiply_results.png'}")
    plt.close()


def plot_transpose_results():
    """Plot transpose latency on a cache miss vs a cache hit."""
    csv_path = results_dir / "matrix_transpose_results.csv"
    if not csv_path.exists():
        print(f"Results file not found: {csv_path}")
        return

    df = pd.read_csv(csv_path)

    fig, ax = plt.subplots(figsize=(7, 5))
    for cache_state, marker in (('miss', 's'), ('hit', '^')):
        data = df[df['cache'] == cache_state]
        ax.semilogy(data['M'], data['latency_ms'], '-', marker=marker, label=f'cache {cache_state}')

    ax.set_xlabel('Matrix Dimension (M)')
    ax.set_ylabel('Latency (ms)')
    ax.set_title('Transpose Latency: Cache Miss vs Hit')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(plots_dir / "matrix_transpose_results.png", dpi=150)
    print(f"Saved plot: {plots_dir / 'matrix_transpose_results.png'}")
    plt.close()


if __name__ == "__main__":
    plots_dir.mkdir(parents=True, exist_ok=True)
    plot_multiply_results()
    plot_transpose_results()
