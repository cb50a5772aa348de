"""Infrastructure Layer — process-local state and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
