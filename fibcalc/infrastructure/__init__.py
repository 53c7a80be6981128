"""
Infrastructure Layer

Adapters for external systems: Redis (result cache, job channel, dead
letters) and the SQL durable store.
"""
