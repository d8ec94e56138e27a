import base64
from datetime import datetime

import pytest

from stockapp.app import create_app
from stockapp.config import Config
from stockapp.db import db
from stockapp.models import ExchangeModel, StockIndexModel, QuoteSnapshot, QuoteType
from stockapp.services import UserService


@pytest.fixture
def app(tmp_path):
    """App on a throwaway SQLite file, with an application context pushed"""
    class TestConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'test.db'}"
        BCRYPT_LOG_ROUNDS = 4
        USER_CREATE_SECRET = None

    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def nse(app):
    """NSE exchange (id 1) with the NIFTY 50 index (id 7), no listings"""
    db.session.add(ExchangeModel(id=1, code="NSE", title="National Stock Exchange of India"))
    db.session.add(StockIndexModel(id=7, exchange_id=1, index_name="NIFTY 50"))
    db.session.commit()
    return {"exchange_id": 1, "index_id": 7, "index_name": "NIFTY 50"}


@pytest.fixture
def make_batch():
    """
    Build a batch: the index snapshot followed by (symbol, ltp, change) stocks.
    """
    def _make(stocks, index_name="NIFTY 50", index_ltp=22000.0, index_change=100.0,
              fetched_at=None, exchange_id=1):
        fetched_at = fetched_at or datetime.now()
        batch = [QuoteSnapshot(
            symbol=index_name,
            type=QuoteType.INDEX,
            exchange_id=exchange_id,
            open=index_ltp - 50,
            volume=1234.5,
            last_traded_price=index_ltp,
            previous_close=index_ltp - index_change,
            high=index_ltp + 10,
            low=index_ltp - 60,
            last_updated_at=fetched_at,
        )]
        for symbol, ltp, change in stocks:
            batch.append(QuoteSnapshot(
                symbol=symbol,
                type=QuoteType.STOCK,
                exchange_id=exchange_id,
                open=ltp - 5,
                volume=10.0,
                last_traded_price=ltp,
                previous_close=ltp - change,
                high=ltp + 5,
                low=ltp - 10,
                last_updated_at=fetched_at,
            ))
        return batch
    return _make


@pytest.fixture
def user(app):
    result = UserService(log_rounds=4).create_user("alice", "Sup3rsecret")
    assert result.ok
    return {"id": result.user_id, "username": "alice", "password": "Sup3rsecret"}


@pytest.fixture
def basic_auth():
    def _header(username, password):
        token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
        return f"Basic {token}"
    return _header


@pytest.fixture
def auth_headers(user, basic_auth):
    return {
        "Username": user["username"],
        "Authorization": basic_auth(user["username"], user["password"]),
    }
