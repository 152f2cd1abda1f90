"""Race schedule fetchers."""

from f1countdown.fetchers.base import DataFetcher
from f1countdown.fetchers.jolpica import JolpicaFetcher
from f1countdown.fetchers.rate_limit import RateBudget

__all__ = [
    "DataFetcher",
    "JolpicaFetcher",
    "RateBudget",
]
