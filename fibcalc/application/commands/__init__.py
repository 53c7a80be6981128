"""Application Layer Commands (CQRS write side)."""

from fibcalc.application.commands.submit_index import SubmitIndexCommand

__all__ = ["SubmitIndexCommand"]
