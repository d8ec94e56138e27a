from .base_indexer import ExchangeIndexer
from .nse_indexer import NSEIndexer

# Exchange code -> indexer class
INDEXERS = {
    NSEIndexer.exchange_code: NSEIndexer,
}

__all__ = [
    "ExchangeIndexer",
    "NSEIndexer",
    "INDEXERS",
]
