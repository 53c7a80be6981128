"""
Fibonacci Value Objects.

Available Value Objects:
    - SubmittedIndex: Validated, immutable index accepted for computation
"""

from fibcalc.domain.fibonacci.value_objects.submitted_index import SubmittedIndex

__all__ = ["SubmittedIndex"]
