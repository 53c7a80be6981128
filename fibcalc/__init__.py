"""
fibcalc - Asynchronous Fibonacci job pipeline.

An API accepts an index, records it in a durable SQL store, seeds a pending
placeholder in Redis and publishes a job; a single compute worker consumes
jobs from Redis pub/sub and writes results back to the cache that the API
polls.

Layers:
    - api: FastAPI presentation layer
    - application: use cases, queries, compute worker
    - domain: index validation, Fibonacci computation, exceptions
    - infrastructure: Redis and SQLAlchemy adapters
"""

__version__ = "0.1.0"
