"""
Market Data

In-memory records produced by indexers and search.
"""
from enum import Enum
from datetime import datetime
from dataclasses import dataclass
from typing import Optional


class QuoteType(str, Enum):
    STOCK = "STOCK"
    INDEX = "INDEX"


@dataclass
class QuoteSnapshot:
    """
    Normalized quote as fetched from an exchange feed.

    Attributes:
        symbol: Stock symbol, or the index name for an index
        type: STOCK or INDEX
        exchange_id: Exchange the item trades on
        last_updated_at: Time at which the fetch began
    """
    symbol: str
    type: QuoteType
    exchange_id: int
    open: float = 0.0
    volume: float = 0.0
    last_traded_price: float = 0.0
    previous_close: float = 0.0
    high: float = 0.0
    low: float = 0.0
    last_updated_at: Optional[datetime] = None


@dataclass
class QuoteLite:
    """Search result: just enough to identify an item"""
    exchange_id: int
    symbol: str
    type: str
