from abc import ABC, abstractmethod

from stockapp.config import setup_logger
from stockapp.repositories import ExchangeRepository
from stockapp.utils.database_manager import DatabaseManager


class ExchangeIndexer(ABC):
    """
    Indexes the market data of a single stock exchange.

    Subclasses set exchange_code/exchange_title and implement
    get_exchange_indexes() and fetch_index().
    """
    exchange_code = None
    exchange_title = None

    def __init__(self, sync_service=None, logger=None):
        self.sync_service = sync_service
        self.logger = logger or setup_logger(name=self.__class__.__name__)
        self._exchange = None

    def get_exchange(self):
        """
        Exchange row indexed by this indexer, looked up once and cached.

        Returns:
            ExchangeModel: exchange, or None if it has not been seeded
        """
        if self._exchange is None:
            with DatabaseManager.session_scope() as session:
                self._exchange = ExchangeRepository(session).get_by_code(self.exchange_code)
        return self._exchange

    @abstractmethod
    def get_exchange_indexes(self):
        """Names of the indexes covered, matching stock_indexes.index_name"""

    @abstractmethod
    def fetch_index(self, index_name):
        """
        Fetch the latest quotes of an index and its constituents.

        Returns:
            list: QuoteSnapshot items, the index first; empty on any failure
        """

    def sync_to_data_store(self, batch):
        """Hand a fetched batch to the sync service"""
        if self.sync_service is None:
            raise RuntimeError(f"No sync service configured for {self.exchange_code}")
        return self.sync_service.sync_batch(self.exchange_code, batch)
