"""Services Layer — orchestration of core logic around the quote cache.

Invariants:
    - Services own the only stateful collaborator (QuoteCache) by injection
"""
