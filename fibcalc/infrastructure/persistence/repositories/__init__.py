"""
Repository Implementations

SQLAlchemy-backed implementations of domain repository protocols.
"""

from .submitted_index_repository import SqlSubmittedIndexRepository

__all__ = ["SqlSubmittedIndexRepository"]
