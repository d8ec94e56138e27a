from .exchange_model import ExchangeModel
from .quote_model import QuoteModel
from .stock_index_model import StockIndexModel, IndexListingModel
from .user_model import UserModel
from .market_data import QuoteType, QuoteSnapshot, QuoteLite


__all__ = [
    "ExchangeModel",
    "QuoteModel",
    "StockIndexModel",
    "IndexListingModel",
    "UserModel",
    "QuoteType",
    "QuoteSnapshot",
    "QuoteLite",
]
