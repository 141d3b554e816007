"""
Scenario runner for the Matrix kernels.
Runs the transpose and multiply scenarios and reports pass/fail per group.
Usage: python src/bench/run_scenarios.py
"""

import sys
from pathlib import Path

# Add project root to path (two levels up from this file)
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.kernels.matrix import Matrix
from src.kernels.matrix_errors import EmptyOperand


def _expect_equal(actual, expected, message, out):
    if actual != expected:
        out.write(f"expected:\n{expected}but was:\n{actual}\n")
        raise AssertionError(message)


def check_transpose(out):
    """Transpose scenarios on empty, non-square and square matrices, with cache invalidation."""
    # Empty matrices
    m1 = Matrix()
    m2 = Matrix()
    _expect_equal(m1.transpose(), m1, "empty matrix transpose 1", out)
    _expect_equal(m1.transpose(), m2, "empty matrix transpose 2", out)

    # n != m matrices
    m3 = Matrix([[1, 2, 3]])
    m4 = Matrix([[1], [2], [3]])
    m5 = Matrix([[10], [2], [3]])
    m6 = Matrix([[1, 2, 3], [4, 5, 6]])
    m6_T = Matrix([[1, 4], [2, 5], [3, 6]])

    _expect_equal(m3.transpose(), m4, "{{1,2,3}} != {{1}, {2}, {3}}", out)

    # Writing through the row accessor must drop the cached transpose
    m3[0, 0] = 10

    _expect_equal(m3.transpose(), m5, "{{10,2,3}} != {{10}, {2}, {3}}", out)

    _expect_equal(m6.transpose(), m6_T, "{{1,2,3}, {4,5,6}} != {{1,4}, {2,5}, {3,6}}", out)

    # Square matrices
    m7 = Matrix(10, 10)
    m7_T = Matrix(10, 10)
    for i in range(10):
        for j in range(10):
            m7[i, j] = i * 10 + j
            m7_T[j, i] = i * 10 + j

    _expect_equal(m7.transpose(), m7_T, "square matrix 1", out)


def check_multiply(out):
    """Multiply scenarios: empty operand, chained products and the outer product."""
    m0 = Matrix()
    m1 = Matrix([[1, 2, 3]])
    m2 = Matrix([[1], [2], [3]])
    m3 = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    result1 = Matrix([[228]])
    result2 = Matrix([[1, 2, 3], [2, 4, 6], [3, 6, 9]])

    try:
        m0 * m1
    except EmptyOperand:
        pass
    else:
        raise AssertionError("multiply by 0")

    _expect_equal(m1 * m3 * m2, result1, "multiply 1", out)

    _expect_equal(m1.multiply(m3).multiply(m2), result1, "multiply 2", out)

    _expect_equal(m2 * m1, result2, "multiply 3", out)


SCENARIOS = [
    ("transpose", check_transpose),
    ("multiply", check_multiply),
]


def run_scenarios(out=None):
    """
    Run every scenario group, reporting each on its own line.

    Args:
        out: Text stream for the report (defaults to sys.stdout)

    Returns:
        True if every group passed
    """
    if out is None:
        out = sys.stdout
    all_passed = True
    for name, check in SCENARIOS:
        out.write(f"Testing {name}... ")
        try:
            check(out)
            out.write("passed\n")
        except Exception as e:
            out.write(f"failed: {e}\n")
            all_passed = False
    return all_passed


def main():
    return 0 if run_scenarios() else 1


if __name__ == "__main__":
    sys.exit(main())
