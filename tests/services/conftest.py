"""Service test fixtures — fake clock, isolated quote cache, FastAPI test client.

Invariants:
    - Every test gets a fresh QuoteCache driven by a FakeClock (no sleeping)
    - The client talks to the real app through ASGITransport with the test
      QuoteService installed on app.state, restored afterwards
"""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from shipquote.infrastructure.quote_cache import QuoteCache
from shipquote.main import app
from shipquote.services.quote_service import QuoteService


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return QuoteCache(ttl_ms=300_000, max_entries=1000, clock=clock)


@pytest.fixture
def service(cache):
    return QuoteService(cache)


@pytest.fixture
def body():
    """Encode a quote request body the way a client would send it."""
    def _body(weight=10, state="MD", postal_code="21201") -> bytes:
        return json.dumps(
            {"weight": weight, "state": state, "postalCode": postal_code},
        ).encode()
    return _body


@pytest.fixture
async def client(service):
    """FastAPI test client with an isolated QuoteService on app.state."""
    original = getattr(app.state, "quote_service", None)
    app.state.quote_service = service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.quote_service = original
