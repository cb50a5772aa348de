"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas describe the wire shape; domain records live in core/domain_types
"""
