"""
Infrastructure HTTP partagee par les sources de metadonnees.

- APICache: Cache persistant avec TTL differencies (recherche 24h, documents 7j)
- RateLimiter: Intervalle minimal entre deux requetes d'une source
- RateLimitError: Exception pour les erreurs 429
- with_retry / request_with_retry: Backoff exponentiel sur 429
"""

from animeta.adapters.api.cache import APICache
from animeta.adapters.api.rate_limit import RateLimiter
from animeta.adapters.api.retry import RateLimitError, request_with_retry, with_retry

__all__ = [
    "APICache",
    "RateLimiter",
    "RateLimitError",
    "request_with_retry",
    "with_retry",
]
