"""Domain services for the Fibonacci pipeline."""

from .fibonacci import fib

__all__ = ["fib"]
