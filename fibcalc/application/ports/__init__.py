"""
Application Layer Ports (Interfaces)

Contains Protocol definitions for dependency inversion.
Infrastructure Layer implements these protocols.
"""

from fibcalc.application.ports.dead_letter import DeadLetterSinkProtocol
from fibcalc.application.ports.job_channel import (
    JobChannelProtocol,
    SubscriptionProtocol,
)
from fibcalc.application.ports.result_cache import ResultCacheProtocol

__all__ = [
    "ResultCacheProtocol",
    "JobChannelProtocol",
    "SubscriptionProtocol",
    "DeadLetterSinkProtocol",
]
