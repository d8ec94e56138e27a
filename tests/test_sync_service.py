from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from stockapp.db import db
from stockapp.models import QuoteModel, StockIndexModel
from stockapp.repositories import ExchangeRepository, QuoteRepository, IndexListingRepository
from stockapp.services import SyncService
from stockapp.services.sync_service import get_index_from_batch


def _quotes():
    db.session.expire_all()
    return {quote.symbol: quote for quote in db.session.query(QuoteModel).all()}


def _members(index_id=7):
    rows = db.session.execute(
        text("SELECT s.symbol FROM index_listings l JOIN stocks s ON s.stock_id = l.stock_id "
             "WHERE l.index_id = :index_id"),
        {"index_id": index_id}
    ).all()
    return {row[0] for row in rows}


def test_first_sync_inserts_quotes_and_listings(nse, make_batch):
    batch = make_batch([("RELIANCE", 2800.0, 20.0)])

    assert SyncService().sync_batch("NSE", batch) is True

    quotes = _quotes()
    assert set(quotes) == {"NIFTY 50", "RELIANCE"}
    assert quotes["NIFTY 50"].type == "INDEX"
    assert quotes["NIFTY 50"].previous_close == pytest.approx(21900.0)
    assert quotes["RELIANCE"].type == "STOCK"
    assert quotes["RELIANCE"].previous_close == pytest.approx(2780.0)
    assert quotes["RELIANCE"].change == pytest.approx(20.0)
    # the index itself is never listed as its own member
    assert _members() == {"RELIANCE"}


def test_membership_change_updates_listings(nse, make_batch):
    t0 = datetime(2024, 1, 2, 9, 15)
    t1 = t0 + timedelta(minutes=1)
    service = SyncService()
    assert service.sync_batch("NSE", make_batch([("A", 10.0, 1.0), ("B", 20.0, 2.0)], fetched_at=t0))

    assert service.sync_batch("NSE", make_batch([("B", 21.0, 3.0), ("C", 30.0, 3.0)], fetched_at=t1))

    quotes = _quotes()
    assert _members() == {"B", "C"}
    # quote rows are never deleted
    assert set(quotes) == {"NIFTY 50", "A", "B", "C"}
    assert quotes["A"].last_updated_at == t0
    assert quotes["B"].last_updated_at == t1
    assert quotes["B"].last_traded_price == pytest.approx(21.0)
    assert quotes["C"].last_updated_at == t1


def test_resync_is_idempotent(nse, make_batch):
    service = SyncService()
    batch = make_batch([("A", 10.0, 1.0), ("B", 20.0, 2.0)])
    assert service.sync_batch("NSE", batch)
    before = {symbol: quote.id for symbol, quote in _quotes().items()}

    assert service.sync_batch("NSE", batch)

    after = {symbol: quote.id for symbol, quote in _quotes().items()}
    assert after == before
    assert _members() == {"A", "B"}
    count = db.session.execute(text("SELECT COUNT(*) FROM index_listings")).scalar()
    assert count == 2


def test_values_only_change_touches_no_listings(nse, make_batch):
    service = SyncService()
    assert service.sync_batch("NSE", make_batch([("A", 10.0, 1.0)]))

    with patch("stockapp.services.sync_service.IndexListingRepository.delete_listings") as delete_mock, \
            patch("stockapp.services.sync_service.IndexListingRepository.add_listings") as add_mock:
        assert service.sync_batch("NSE", make_batch([("A", 11.0, 2.0)]))

    delete_mock.assert_not_called()
    add_mock.assert_not_called()
    assert _quotes()["A"].last_traded_price == pytest.approx(11.0)


def test_rejoining_stock_reuses_its_row(nse, make_batch):
    service = SyncService()
    assert service.sync_batch("NSE", make_batch([("A", 10.0, 1.0), ("B", 20.0, 2.0)]))
    first_id = _quotes()["A"].id
    assert service.sync_batch("NSE", make_batch([("B", 20.0, 2.0)]))
    assert _members() == {"B"}

    assert service.sync_batch("NSE", make_batch([("A", 12.0, 1.0), ("B", 20.0, 2.0)]))

    assert _quotes()["A"].id == first_id
    assert _members() == {"A", "B"}


def test_duplicate_symbol_last_one_wins(nse, make_batch):
    batch = make_batch([("A", 10.0, 1.0), ("A", 15.0, 5.0)])

    assert SyncService().sync_batch("NSE", batch)

    quotes = _quotes()
    assert quotes["A"].last_traded_price == pytest.approx(15.0)
    assert quotes["A"].previous_close == pytest.approx(10.0)
    assert _members() == {"A"}


def test_batch_without_index_is_rejected(nse, make_batch):
    batch = make_batch([("A", 10.0, 1.0)])[1:]

    assert SyncService().sync_batch("NSE", batch) is False
    assert _quotes() == {}


def test_batch_naming_two_indexes_is_rejected(nse, make_batch):
    batch = make_batch([("A", 10.0, 1.0)]) + make_batch([], index_name="NIFTY NEXT 50")

    assert SyncService().sync_batch("NSE", batch) is False
    assert _quotes() == {}


def test_empty_batch_is_rejected(nse):
    assert SyncService().sync_batch("NSE", []) is False


def test_unknown_exchange_is_rejected(nse, make_batch):
    assert SyncService().sync_batch("BSE", make_batch([("A", 10.0, 1.0)])) is False
    assert _quotes() == {}


def test_unresolvable_index_keeps_quotes_but_fails(nse, make_batch):
    batch = make_batch([("A", 10.0, 1.0)], index_name="NIFTY BANK")

    assert SyncService().sync_batch("NSE", batch) is False

    # quotes were committed before listings were attempted
    assert set(_quotes()) == {"NIFTY BANK", "A"}
    assert db.session.execute(text("SELECT COUNT(*) FROM index_listings")).scalar() == 0


def test_unresolvable_index_fails_in_single_transaction_mode(nse, make_batch):
    batch = make_batch([("A", 10.0, 1.0)], index_name="NIFTY BANK")

    assert SyncService(single_transaction=True).sync_batch("NSE", batch) is False

    # the failure is reported after commit, quotes are still kept
    assert set(_quotes()) == {"NIFTY BANK", "A"}


def test_single_transaction_mode_syncs(nse, make_batch):
    service = SyncService(single_transaction=True)
    assert service.sync_batch("NSE", make_batch([("A", 10.0, 1.0), ("B", 20.0, 2.0)]))
    assert service.sync_batch("NSE", make_batch([("B", 20.0, 2.0), ("C", 30.0, 3.0)]))

    assert _members() == {"B", "C"}


def test_store_failure_rolls_back_the_quote_upsert(nse, make_batch):
    service = SyncService()
    assert service.sync_batch("NSE", make_batch([("A", 10.0, 1.0)]))

    with patch.object(QuoteRepository, "add", side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))):
        assert service.sync_batch("NSE", make_batch([("A", 99.0, 1.0), ("B", 20.0, 2.0)])) is False

    quotes = _quotes()
    assert set(quotes) == {"NIFTY 50", "A"}
    assert quotes["A"].last_traded_price == pytest.approx(10.0)
    assert _members() == {"A"}


def test_other_indexes_are_left_alone(nse, make_batch):
    db.session.add(StockIndexModel(id=8, exchange_id=1, index_name="NIFTY NEXT 50"))
    db.session.commit()
    service = SyncService()
    assert service.sync_batch("NSE", make_batch([("A", 10.0, 1.0)]))
    assert service.sync_batch("NSE", make_batch([("B", 20.0, 1.0)], index_name="NIFTY NEXT 50"))

    assert service.sync_batch("NSE", make_batch([("C", 30.0, 1.0)]))

    assert _members(7) == {"C"}
    assert _members(8) == {"B"}


def test_get_index_from_batch(make_batch):
    batch = make_batch([("A", 10.0, 1.0)])
    assert get_index_from_batch(batch).symbol == "NIFTY 50"
    assert get_index_from_batch(batch[1:]) is None


def test_repositories_fetch_by_id(nse, make_batch):
    assert SyncService().sync_batch("NSE", make_batch([("A", 10.0, 1.0)]))
    quote_id = _quotes()["A"].id

    assert QuoteRepository().get_by_id(quote_id).symbol == "A"
    assert ExchangeRepository().get_by_id(1).code == "NSE"
    assert QuoteRepository().get_by_id(quote_id + 100) is None


def test_store_failure_in_listing_update_keeps_quotes(nse, make_batch):
    service = SyncService()
    assert service.sync_batch("NSE", make_batch([("A", 10.0, 1.0)]))

    error = OperationalError("INSERT", {}, Exception("database is locked"))
    with patch.object(IndexListingRepository, "add_listings", side_effect=error):
        assert service.sync_batch("NSE", make_batch([("A", 11.0, 1.0), ("B", 20.0, 2.0)])) is False

    quotes = _quotes()
    # quotes were committed before the listing update failed
    assert set(quotes) == {"NIFTY 50", "A", "B"}
    assert quotes["A"].last_traded_price == pytest.approx(11.0)
    assert _members() == {"A"}
