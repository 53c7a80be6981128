"""
Application Layer

Use cases, CQRS commands/queries, ports and the compute worker.
Depends on Domain Layer only; Infrastructure is injected through ports.
"""
