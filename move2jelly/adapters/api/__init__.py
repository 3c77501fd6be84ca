"""
Client du catalogue TMDB et son infrastructure partagee.

- TMDBClient: implementation de ICatalogClient (core/ports/api_clients.py)
- APICache: cache persistant avec TTL differencies (recherche 24h, fiches 7j)
- request_with_retry: backoff exponentiel sur 429 et erreurs 5xx passageres
"""

from move2jelly.adapters.api.cache import APICache
from move2jelly.adapters.api.retry import (
    RateLimitError,
    RetryableResponseError,
    TransientServerError,
    request_with_retry,
    with_retry,
)
from move2jelly.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "RateLimitError",
    "RetryableResponseError",
    "TMDBClient",
    "TransientServerError",
    "request_with_retry",
    "with_retry",
]
