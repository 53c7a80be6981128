"""
Shared Utilities

Responsibility:
    Cross-cutting concerns used across all layers.

Contains:
    - settings: Environment-based configuration (Redis, database, pipeline, worker)

Does NOT contain:
    - Layer-specific code
    - Business logic
    - Infrastructure implementations
"""

from .settings import Settings, get_settings, load_settings

__all__ = ["Settings", "get_settings", "load_settings"]
