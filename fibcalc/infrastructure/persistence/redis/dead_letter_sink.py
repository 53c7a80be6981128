"""
Redis Dead Letter Sink.

Records job messages dropped by the compute worker in a Redis list, newest
first. Enabled with WORKER_DEAD_LETTER_ENABLED=true; nothing reads the list
back, it exists for operators (LRANGE dead_letters 0 -1).

Entry format (JSON):
    {"payload": "abc", "index": null, "error": "...", "failed_at": "2025-01-11T10:30:45"}
"""

import json
import logging
from datetime import datetime
from typing import Optional

from redis import Redis

logger = logging.getLogger(__name__)


class RedisDeadLetterSink:
    """Dead-letter list in Redis (LPUSH, optional length cap)."""

    def __init__(
        self, redis: Redis, key: str = "dead_letters", max_length: Optional[int] = 1000
    ) -> None:
        self.redis = redis
        self.key = key
        self.max_length = max_length

    def record(self, payload: str, error: str, index: Optional[int] = None) -> None:
        entry = {
            "payload": payload,
            "index": index,
            "error": error,
            "failed_at": datetime.now().isoformat(),
        }
        pipe = self.redis.pipeline()
        pipe.lpush(self.key, json.dumps(entry))
        if self.max_length:
            pipe.ltrim(self.key, 0, self.max_length - 1)
        pipe.execute()
        logger.info(f"Dead letter recorded in '{self.key}' for payload {payload!r}")
