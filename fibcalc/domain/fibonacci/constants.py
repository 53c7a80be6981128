"""
Fibonacci Pipeline Constants

Values shared by the dispatcher, the query service and the compute worker.
"""

from typing import Final

# Cache value meaning "computation requested, result not written yet".
# A permanently dropped job looks exactly the same.
PENDING_VALUE: Final[str] = "pending"

# Default upper bound for accepted indices (recursive fib(40) is already slow)
DEFAULT_MAX_INDEX: Final[int] = 40

# Smallest accepted index
MIN_INDEX: Final[int] = 0
