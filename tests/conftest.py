"""Root conftest — shared test configuration."""

import os

# Keep test runs independent of a developer's .env
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("CACHE_TTL_SECONDS", "300")
os.environ.setdefault("CACHE_MAX_ENTRIES", "1000")
