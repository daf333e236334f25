"""Sports Scheduler — session lifecycle and roster engine.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
