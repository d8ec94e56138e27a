from typing import Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from stockapp.db import db
from stockapp.models import StockIndexModel


class StockIndexRepository:

    RESOLVE_INDEX_ID_QRY = text(
        "SELECT stock_index_id FROM stock_indexes "
        "WHERE exchange_id = :exchange_id AND index_name = :index_name"
    )

    def __init__(self, session: Optional[Session] = None):
        self.session = session if session is not None else db.session

    def resolve_index_ids(self, exchange_id, index_name):
        """
        All ids of stock_indexes rows matching (exchange, name).

        Callers treat anything but exactly one id as unresolvable.
        """
        rows = self.session.execute(
            self.RESOLVE_INDEX_ID_QRY,
            {"exchange_id": exchange_id, "index_name": index_name}
        ).all()
        return [row[0] for row in rows]

    def get_index_id(self, exchange_id, index_name):
        ids = self.resolve_index_ids(exchange_id, index_name)
        if len(ids) != 1:
            return None
        return ids[0]

    def get_index_names(self, exchange_id):
        rows = self.session.query(StockIndexModel.index_name).filter(
            StockIndexModel.exchange_id == exchange_id
        ).order_by(StockIndexModel.index_name.asc()).all()
        return [row[0] for row in rows]

    def get_index_keys(self, exchange_ids):
        """
        (exchange_id, index_name) pairs for the given exchanges.

        Returns:
            set: pairs usable to label quotes as indexes
        """
        exchange_ids = list(set(exchange_ids))
        if not exchange_ids:
            return set()
        rows = self.session.query(
            StockIndexModel.exchange_id, StockIndexModel.index_name
        ).filter(
            StockIndexModel.exchange_id.in_(exchange_ids)
        ).all()
        return {(row[0], row[1]) for row in rows}

    def add(self, exchange_id, index_name):
        stock_index = StockIndexModel(exchange_id=exchange_id, index_name=index_name)
        self.session.add(stock_index)
        self.session.flush()
        return stock_index
