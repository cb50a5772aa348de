"""Shipping Quote Package — weight-tier carrier rates behind a TTL cache.

Invariants:
    - Package root contains no executable code beyond the version string
"""

__version__ = "1.0.0"
