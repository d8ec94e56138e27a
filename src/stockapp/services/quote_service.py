"""
Quote Service

Read side of the market data: single quotes, index members, search,
exchanges and indexes. Store failures surface as StoreError.
"""
from stockapp.config import setup_logger
from stockapp.models import QuoteLite, QuoteType
from stockapp.repositories import ExchangeRepository, QuoteRepository, StockIndexRepository
from stockapp.utils.database_manager import DatabaseManager

logger = setup_logger(name="QuoteService")


class QuoteService:

    def get_exchange(self, exchange_code):
        with DatabaseManager.session_scope() as session:
            return ExchangeRepository(session).get_by_code(exchange_code)

    def get_quote(self, exchange_code, symbol):
        """
        Latest quote of a stock or index.

        Returns:
            QuoteModel: quote, or None if the exchange or symbol is unknown
        """
        with DatabaseManager.session_scope() as session:
            exchange = ExchangeRepository(session).get_by_code(exchange_code)
            if exchange is None:
                return None
            return QuoteRepository(session).get_by_symbol(exchange.id, symbol)

    def get_index_members(self, exchange_code, index_name):
        """
        Quote of an index followed by the quotes of its constituents.

        Returns:
            list: QuoteModel items, or None if the exchange or index is unknown
        """
        with DatabaseManager.session_scope() as session:
            exchange = ExchangeRepository(session).get_by_code(exchange_code)
            if exchange is None:
                return None

            index_id = StockIndexRepository(session).get_index_id(exchange.id, index_name)
            if index_id is None:
                return None

            quote_repo = QuoteRepository(session)
            items = []
            index_quote = quote_repo.get_by_symbol(exchange.id, index_name)
            if index_quote is not None:
                items.append(index_quote)
            items.extend(quote_repo.get_index_members(index_id))
            return items

    def search_by_substring(self, substr):
        """
        Stocks and indexes whose symbol contains substr.

        The caller upper-cases substr. Each result is labelled by looking its
        (exchange_id, symbol) up in stock_indexes rather than trusting the
        stored type.

        Returns:
            list: QuoteLite items
        """
        with DatabaseManager.session_scope() as session:
            quotes = QuoteRepository(session).search_symbols(substr)
            index_keys = StockIndexRepository(session).get_index_keys(
                quote.exchange_id for quote in quotes
            )

        results = []
        for quote in quotes:
            is_index = (quote.exchange_id, quote.symbol) in index_keys
            results.append(QuoteLite(
                exchange_id=quote.exchange_id,
                symbol=quote.symbol,
                type=(QuoteType.INDEX if is_index else QuoteType.STOCK).value,
            ))
        logger.info(f"Search '{substr}' matched {len(results)} items")
        return results

    def list_exchanges(self, exchange_ids):
        with DatabaseManager.session_scope() as session:
            return ExchangeRepository(session).get_by_ids(exchange_ids)

    def list_indexes(self, exchange_id):
        """Quotes of all indexes known on an exchange"""
        with DatabaseManager.session_scope() as session:
            return QuoteRepository(session).get_indexes(exchange_id)
