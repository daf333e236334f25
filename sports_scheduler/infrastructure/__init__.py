"""Infrastructure Layer — database access, storage implementation, observability.

Invariants:
    - Implements the Protocols in core/repository_protocols.py
    - SQLAlchemy exceptions never escape as-is: they become SchedulerError subclasses
"""
