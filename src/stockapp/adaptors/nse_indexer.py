"""
NSE Indexer

Scrapes the NSE live watch pages, one JSON document per index.
"""
from datetime import datetime

import requests

from stockapp.config import NSE_BASE_URL, NSE_REQUEST_TIMEOUT, NSE_USER_AGENT
from stockapp.exceptions import FeedError, StoreError
from stockapp.models import QuoteSnapshot, QuoteType
from stockapp.utils.parse_utils import parse_number
from .base_indexer import ExchangeIndexer


DATA_KEY = "data"
LATEST_DATA_KEY = "latestData"
SYMBOL_KEY = "symbol"
INDEX_NAME_KEY = "indexName"
OPEN_KEY = "open"
HIGH_KEY = "high"
LOW_KEY = "low"
INDEX_LTP_KEY = "ltp"
STOCK_LTP_KEY = "ltP"
INDEX_CHG_KEY = "ch"
STOCK_CHG_KEY = "ptsC"
INDEX_VOL_KEY = "trdVolumesum"
STOCK_VOL_KEY = "trdVol"


class NSEIndexer(ExchangeIndexer):
    exchange_code = "NSE"
    exchange_title = "National Stock Exchange of India"

    # Names must match stock_indexes.index_name and the feed's indexName
    INDEX_SUFFIXES = {
        "NIFTY 50": "niftyStockWatch.json",
        "NIFTY NEXT 50": "juniorNiftyStockWatch.json",
        "NIFTY MIDCAP 50": "niftyMidcap50StockWatch.json",
    }

    def __init__(self, sync_service=None, logger=None, base_url=None, timeout=None, http_session=None):
        super().__init__(sync_service, logger)
        self.base_url = (base_url or NSE_BASE_URL).rstrip("/")
        self.timeout = timeout or NSE_REQUEST_TIMEOUT
        self.http = http_session or requests.Session()
        self.http.headers.update({"User-Agent": NSE_USER_AGENT, "Accept": "application/json"})

    def get_exchange_indexes(self):
        return list(self.INDEX_SUFFIXES)

    def get_index_url(self, index_name):
        suffix = self.INDEX_SUFFIXES.get(index_name)
        if suffix is None:
            return None
        return f"{self.base_url}/{suffix}"

    def fetch_index(self, index_name):
        started_at = datetime.now()
        try:
            url = self.get_index_url(index_name)
            if url is None:
                raise FeedError(f"Unknown NSE index {index_name}")

            exchange = self.get_exchange()
            if exchange is None:
                raise FeedError(f"Exchange {self.exchange_code} is not registered")

            payload = self._get_json(url)
            items = self.parse_payload(payload, started_at, exchange.id)
            self.logger.info(f"Fetched {len(items)} items for {index_name}")
            return items
        except (FeedError, StoreError) as e:
            self.logger.error(f"Error retrieving items for {index_name}: {e}")
            return []

    def _get_json(self, url):
        try:
            response = self.http.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise FeedError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise FeedError(f"Malformed JSON from {url}: {e}") from e

    def parse_payload(self, payload, fetched_at, exchange_id):
        """
        Build the batch for one live watch document.

        The index record comes first; its volume lives in the outer object.
        """
        try:
            index_data = dict(payload[LATEST_DATA_KEY][0])
            index_data[INDEX_VOL_KEY] = payload[INDEX_VOL_KEY]
            items = [self._to_snapshot(index_data, fetched_at, exchange_id, is_index=True)]
            for elem in payload[DATA_KEY]:
                items.append(self._to_snapshot(elem, fetched_at, exchange_id, is_index=False))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise FeedError(f"Malformed NSE payload: {e!r}") from e
        return items

    @staticmethod
    def _to_snapshot(obj, fetched_at, exchange_id, is_index):
        last_traded_price = parse_number(obj[INDEX_LTP_KEY if is_index else STOCK_LTP_KEY])
        change = parse_number(obj[INDEX_CHG_KEY if is_index else STOCK_CHG_KEY])
        return QuoteSnapshot(
            symbol=obj[INDEX_NAME_KEY if is_index else SYMBOL_KEY],
            type=QuoteType.INDEX if is_index else QuoteType.STOCK,
            exchange_id=exchange_id,
            open=parse_number(obj[OPEN_KEY]),
            volume=parse_number(obj[INDEX_VOL_KEY if is_index else STOCK_VOL_KEY]),
            last_traded_price=last_traded_price,
            previous_close=last_traded_price - change,
            high=parse_number(obj[HIGH_KEY]),
            low=parse_number(obj[LOW_KEY]),
            last_updated_at=fetched_at,
        )
