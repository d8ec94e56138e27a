"""
Stock updater

Reads exchange codes from exchanges.txt, then keeps their indexes in sync
with the exchange feeds until interrupted. Takes no arguments.

Exit codes: 0 on clean shutdown, 1 when initialization fails.
"""
import signal
import sys

from sqlalchemy.exc import SQLAlchemyError

from stockapp.adaptors import INDEXERS
from stockapp.app import create_app
from stockapp.config import setup_logger, EXCHANGES_FILE
from stockapp.exceptions import StoreError
from stockapp.services import SyncService, UpdateScheduler

logger = setup_logger(name="Updater")


def read_exchange_codes(path=EXCHANGES_FILE):
    """Whitespace delimited exchange codes, e.g. "NSE BSE" """
    with open(path, "r") as f:
        return f.read().split()


def build_indexers(codes, sync_service):
    """
    One indexer per exchange code.

    Raises ValueError for codes without an indexer or exchanges missing from
    the store.
    """
    indexers = []
    for code in codes:
        indexer_cls = INDEXERS.get(code)
        if indexer_cls is None:
            raise ValueError(f"No indexer available for exchange {code}")
        indexer = indexer_cls(sync_service)
        if indexer.get_exchange() is None:
            raise ValueError(f"Exchange {code} is not in the database, run `flask seed` first")
        indexers.append(indexer)
    return indexers


def main():
    try:
        codes = read_exchange_codes()
    except OSError as e:
        logger.error(f"Could not read exchange list from {EXCHANGES_FILE}: {e}")
        return 1
    if not codes:
        logger.error(f"No exchanges listed in {EXCHANGES_FILE}")
        return 1

    try:
        app = create_app()
        sync_service = SyncService(single_transaction=app.config["SYNC_SINGLE_TRANSACTION"])
        with app.app_context():
            indexers = build_indexers(codes, sync_service)
    except (ValueError, StoreError, SQLAlchemyError) as e:
        logger.error(f"Updater initialization failed: {e}")
        return 1

    scheduler = UpdateScheduler(indexers, refresh_interval=app.config["REFRESH_INTERVAL"], app=app)

    def _interrupt(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        scheduler.cancel()

    signal.signal(signal.SIGINT, _interrupt)
    signal.signal(signal.SIGTERM, _interrupt)

    scheduler.start(deadline=app.config.get("UPDATER_DEADLINE"))
    # Short joins keep the main thread responsive to signals
    while scheduler.is_alive():
        scheduler.join(timeout=1.0)
    return 0


if __name__ == "__main__":
    sys.exit(main())
