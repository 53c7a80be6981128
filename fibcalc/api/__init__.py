"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface of the job dispatcher and query service. Handles
    requests, responses and error mapping. No business logic.

Contains:
    - FastAPI routers (values)
    - Request/Response models (Pydantic)
    - Dependency injection setup
    - Middleware configuration (CORS, logging)
"""
