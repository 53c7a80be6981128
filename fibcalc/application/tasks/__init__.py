"""
Application Tasks

Long-running background consumers.
"""

from fibcalc.application.tasks.compute_worker import ComputeWorker

__all__ = ["ComputeWorker"]
