"""
Dot product of two equal-length sequences.
Pure Python accumulation, summed left to right by index so that results are
reproducible for non-associative element types such as floats.
"""

from src.kernels.matrix_errors import DimensionMismatch


def dot(v1, v2, zero=None):
    """
    Compute sum(v1[k] * v2[k]) for k in index order.

    Args:
        v1: First vector (any indexable sequence)
        v2: Second vector, same length as v1
        zero: Starting value of the sum. Defaults to the additive identity of
            the element type, type(v1[0])(), or 0 for empty vectors.

    Returns:
        The accumulated dot product

    Raises:
        DimensionMismatch: If len(v1) != len(v2)
    """
    n = len(v1)
    if n != len(v2):
        raise DimensionMismatch(n, len(v2))

    if zero is None:
        accumulator = type(v1[0])() if n > 0 else 0
    else:
        accumulator = zero

    for k in range(n):
        accumulator = accumulator + v1[k] * v2[k]

    return accumulator


if __name__ == "__main__":
    print("dot([1, 2, 3], [4, 5, 6]) =", dot([1, 2, 3], [4, 5, 6]))
    try:
        dot([1, 2], [1, 2, 3])
    except DimensionMismatch as e:
        print(f"Mismatch detected: {e}")
