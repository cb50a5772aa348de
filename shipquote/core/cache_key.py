"""Cache Key Derivation — coarsens a quote request into its cache slot.

Invariants:
    - Key shape is "{weight}-{STATE}-{zip3}"; only the first 3 postal digits count
    - Integral weights render without a decimal part, so 10 and 10.0 share a slot
"""

from shipquote.core.domain_types import CacheKey, QuoteRequest


POSTAL_PREFIX_LENGTH = 3


def derive_cache_key(request: QuoteRequest) -> CacheKey:
    return CacheKey(
        f"{format_weight(request.weight_oz)}-{request.state}-"
        f"{request.postal_code[:POSTAL_PREFIX_LENGTH]}"
    )


def format_weight(weight_oz: float) -> str:
    if weight_oz.is_integer():
        return str(int(weight_oz))
    return repr(weight_oz)
