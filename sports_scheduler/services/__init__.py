"""Services Layer — orchestrates store IO around the pure core.

Invariants:
    - One service class per concern (sessions, roster, sports, reporting, users)
    - Services depend on the SchedulerStore protocol, never on SQLAlchemy directly
    - Time is read through an injected clock, at call time
"""
