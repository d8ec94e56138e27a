from .exchange_repository import ExchangeRepository
from .quote_repository import QuoteRepository
from .stock_index_repository import StockIndexRepository
from .index_listing_repository import IndexListingRepository
from .user_repository import UserRepository

__all__ = [
    "ExchangeRepository",
    "QuoteRepository",
    "StockIndexRepository",
    "IndexListingRepository",
    "UserRepository",
]
