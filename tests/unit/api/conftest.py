"""
Common fixtures for API unit tests.

Provides shared test utilities:
- FastAPI TestClient with in-memory stores injected via dependency_overrides
"""

import pytest
from fastapi.testclient import TestClient

from fibcalc.api.main import app
from fibcalc.api.routers import values


@pytest.fixture
def client(store, cache, channel, pipeline_settings):
    """
    FastAPI TestClient for testing endpoints.

    Durable store, result cache, job channel and settings are replaced with
    the in-memory fakes from the root conftest. Lifespan is not run (no
    `with` block), so no database or Redis is touched.
    """
    app.dependency_overrides[values.get_submitted_index_repository] = lambda: store
    app.dependency_overrides[values.get_result_cache] = lambda: cache
    app.dependency_overrides[values.get_job_channel] = lambda: channel
    app.dependency_overrides[values.get_pipeline_settings] = lambda: pipeline_settings

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()
