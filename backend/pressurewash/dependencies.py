from functools import lru_cache

from .config import settings
from .repository import InMemoryQuoteStore, JsonFileQuoteStore, QuoteRepository, QuoteStore


def build_store() -> QuoteStore:
    if settings.QUOTES_STORE == "memory":
        return InMemoryQuoteStore()
    return JsonFileQuoteStore(settings.QUOTES_DATA_PATH)


@lru_cache
def get_repository() -> QuoteRepository:
    # One repository per process so every request shares the store's lock
    return QuoteRepository(build_store())
