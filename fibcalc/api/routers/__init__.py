"""
API Routers

Exports:
    - values: /api/values endpoints (submit, history, current values)
"""

from fibcalc.api.routers import values

__all__ = ["values"]
