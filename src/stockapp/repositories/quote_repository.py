"""
Quote Repository

Data access for the stocks table (stock and index quotes).
"""
from typing import Optional

from sqlalchemy.orm import Session

from stockapp.db import db
from stockapp.models import QuoteModel, IndexListingModel, StockIndexModel


class QuoteRepository:

    def __init__(self, session: Optional[Session] = None):
        self.session = session if session is not None else db.session

    def get_by_id(self, stock_id):
        return self.session.get(QuoteModel, stock_id)

    def get_by_symbol(self, exchange_id, symbol):
        """
        Get the quote for a symbol on an exchange.

        Returns:
            QuoteModel: quote or None
        """
        return self.session.query(QuoteModel).filter(
            QuoteModel.exchange_id == exchange_id,
            QuoteModel.symbol == symbol
        ).one_or_none()

    def get_by_symbols(self, exchange_id, symbols):
        """
        Get quotes for many symbols of one exchange.

        Returns:
            dict: symbol -> QuoteModel, only for symbols that exist
        """
        symbols = list(symbols)
        if not symbols:
            return {}
        rows = self.session.query(QuoteModel).filter(
            QuoteModel.exchange_id == exchange_id,
            QuoteModel.symbol.in_(symbols)
        ).all()
        return {row.symbol: row for row in rows}

    def get_index_members(self, index_id):
        """All quotes listed in an index, ordered by symbol"""
        return self.session.query(QuoteModel).join(
            IndexListingModel, IndexListingModel.stock_id == QuoteModel.id
        ).filter(
            IndexListingModel.index_id == index_id
        ).order_by(QuoteModel.symbol.asc()).all()

    def search_symbols(self, substr):
        """
        Quotes whose symbol contains substr, LIKE wildcards escaped.

        Case sensitivity follows the database LIKE (insensitive on SQLite);
        callers upper-case substr to match the stored symbols.
        """
        return self.session.query(QuoteModel).filter(
            QuoteModel.symbol.contains(substr, autoescape=True)
        ).order_by(QuoteModel.exchange_id.asc(), QuoteModel.symbol.asc()).all()

    def get_indexes(self, exchange_id):
        """Quotes of the indexes known on an exchange"""
        return self.session.query(QuoteModel).join(
            StockIndexModel,
            (StockIndexModel.exchange_id == QuoteModel.exchange_id)
            & (StockIndexModel.index_name == QuoteModel.symbol)
        ).filter(
            QuoteModel.exchange_id == exchange_id
        ).order_by(QuoteModel.symbol.asc()).all()

    def add(self, snapshot, exchange_id):
        """Insert a new quote from a snapshot and return it with its generated id"""
        quote = QuoteModel(symbol=snapshot.symbol, exchange_id=exchange_id)
        quote.apply_snapshot(snapshot)
        self.session.add(quote)
        self.session.flush()
        return quote

    def merge(self, quote):
        return self.session.merge(quote)
