"""
Fibonacci Computation

Pure, intentionally expensive function of an index.

The naive double recursion takes exponential time. It is the load the
worker tier exists to absorb, so it is not memoized: every job recomputes
from scratch, and the only reuse is whatever the result cache provides
to readers.
"""


def fib(index: int) -> int:
    """
    Compute the Fibonacci number for index.

    fib(0) = 0, fib(1) = 1, fib(n) = fib(n - 1) + fib(n - 2)

    Args:
        index: Non-negative integer

    Returns:
        Fibonacci number at index

    Raises:
        ValueError: If index is negative

    Examples:
        >>> fib(0)
        0
        >>> fib(7)
        13
    """
    if index < 0:
        raise ValueError(f"index must be non-negative, got {index}")
    if index < 2:
        return index
    return fib(index - 1) + fib(index - 2)
