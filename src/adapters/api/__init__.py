"""
Client de l'API du serveur de bibliotheque.

- BakarrClient: implemente les ports Scanner, Catalogue, Bibliotheque et Import
- APICache: cache persistant des recherches (24h)
- ApiError / RateLimitError: erreurs de l'API (429 relance avec backoff)
"""

from src.adapters.api.bakarr_client import BakarrClient
from src.adapters.api.cache import APICache
from src.adapters.api.retry import (
    ApiError,
    RateLimitError,
    check_response,
    request_with_retry,
    with_retry,
)

__all__ = [
    "APICache",
    "ApiError",
    "BakarrClient",
    "RateLimitError",
    "check_response",
    "request_with_retry",
    "with_retry",
]
