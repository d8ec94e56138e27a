from typing import Optional

from sqlalchemy.orm import Session

from stockapp.db import db
from stockapp.models import ExchangeModel


class ExchangeRepository:

    def __init__(self, session: Optional[Session] = None):
        self.session = session if session is not None else db.session

    def get_by_id(self, exchange_id):
        return self.session.get(ExchangeModel, exchange_id)

    def get_by_code(self, code):
        """Fetch the exchange with the given code, None if absent"""
        return self.session.query(ExchangeModel).filter(
            ExchangeModel.code == code
        ).one_or_none()

    def get_by_ids(self, exchange_ids):
        if not exchange_ids:
            return []
        return self.session.query(ExchangeModel).filter(
            ExchangeModel.id.in_(exchange_ids)
        ).order_by(ExchangeModel.id.asc()).all()

    def add(self, code, title):
        exchange = ExchangeModel(code=code, title=title)
        self.session.add(exchange)
        self.session.flush()
        return exchange
