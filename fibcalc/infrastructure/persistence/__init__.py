"""
Persistence Infrastructure Module

Data persistence implementations (Redis, SQL database).

Exports:
    From redis:
        - RedisResultCache, RedisJobChannel, RedisDeadLetterSink

    From repositories:
        - SqlSubmittedIndexRepository
"""

from .redis import RedisDeadLetterSink, RedisJobChannel, RedisResultCache
from .repositories import SqlSubmittedIndexRepository

__all__ = [
    "RedisResultCache",
    "RedisJobChannel",
    "RedisDeadLetterSink",
    "SqlSubmittedIndexRepository",
]
