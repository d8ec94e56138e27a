"""
Sync Service

Reconciles a fetched batch (one index and its constituents) with the store:
quotes are upserted, then the index's listings are fixed up.
"""
from stockapp.config import setup_logger, SYNC_SINGLE_TRANSACTION
from stockapp.exceptions import StoreError
from stockapp.models import QuoteType
from stockapp.repositories import (
    ExchangeRepository,
    QuoteRepository,
    StockIndexRepository,
    IndexListingRepository,
)
from stockapp.utils.database_manager import DatabaseManager

logger = setup_logger(name="SyncService")


def get_index_from_batch(batch):
    """
    The INDEX item of a batch.

    Returns:
        QuoteSnapshot: the index item, or None when the batch has no index or
        names more than one index
    """
    index_items = [item for item in batch if item.type == QuoteType.INDEX]
    if len({item.symbol for item in index_items}) != 1:
        return None
    return index_items[-1]


class SyncService:
    """
    Writes batches produced by indexers. Not safe to run concurrently for the
    same (exchange, index); the updater is the only writer.
    """

    def __init__(self, single_transaction=None):
        self.single_transaction = (
            SYNC_SINGLE_TRANSACTION if single_transaction is None else single_transaction
        )

    def sync_batch(self, exchange_code, batch):
        """
        Upsert a batch of quotes of one index and update its membership.

        Parameters:
            exchange_code (str): e.g. "NSE"
            batch (list): QuoteSnapshot items, exactly one of them an INDEX

        Returns:
            bool: True if quotes and listings were all written
        """
        if not batch:
            logger.warning(f"Empty batch for {exchange_code}, nothing to sync")
            return False

        try:
            with DatabaseManager.session_scope() as session:
                return self._sync(session, exchange_code, batch)
        except StoreError as e:
            logger.error(f"Error updating index stocks for {exchange_code}: {e}")
            return False

    def _sync(self, session, exchange_code, batch):
        exchange = ExchangeRepository(session).get_by_code(exchange_code)
        if exchange is None:
            logger.error(f"Unknown exchange {exchange_code}, batch dropped")
            return False

        index = get_index_from_batch(batch)
        if index is None:
            logger.error(f"Batch for {exchange_code} does not name exactly one index, batch dropped")
            return False
        index_name = index.symbol

        quote_repo = QuoteRepository(session)
        index_repo = StockIndexRepository(session)
        listing_repo = IndexListingRepository(session)

        # Duplicate symbols: last one wins
        incoming = {}
        for item in batch:
            incoming[item.symbol] = item

        index_id = index_repo.get_index_id(exchange.id, index_name)
        existing = quote_repo.get_index_members(index_id) if index_id is not None else []
        existing_map = {quote.symbol: quote for quote in existing}

        new_symbols = set(incoming) - {index_name}
        existing_symbols = set(existing_map)
        to_add = new_symbols - existing_symbols
        to_remove = existing_symbols - new_symbols

        # Rows are keyed by (exchange, symbol), not by membership: a symbol
        # rejoining an index, or the index itself, reuses its row.
        persisted = quote_repo.get_by_symbols(exchange.id, incoming)

        # T1: upsert quotes. Quote rows are never deleted.
        ids_to_insert = set()
        for symbol, snapshot in incoming.items():
            quote = persisted.get(symbol)
            if quote is None:
                if snapshot.type == QuoteType.STOCK:
                    logger.info(f"New stock named {symbol} is included in the index {index_name}.")
                quote = quote_repo.add(snapshot, exchange.id)
            else:
                quote.apply_snapshot(snapshot)
                quote = quote_repo.merge(quote)
            if symbol in to_add:
                ids_to_insert.add(quote.id)

        if self.single_transaction:
            session.flush()
        else:
            session.commit()

        # T2: fix membership
        if to_add or to_remove:
            index_ids = index_repo.resolve_index_ids(exchange.id, index_name)
            if len(index_ids) != 1:
                session.commit()
                logger.warning(
                    f"Could not resolve index {index_name} on {exchange_code} "
                    f"({len(index_ids)} matches), listings not updated"
                )
                return False
            index_id = index_ids[0]

            remove_ids = [existing_map[symbol].id for symbol in to_remove]
            num_deleted = listing_repo.delete_listings(index_id, remove_ids)
            if num_deleted > 0:
                logger.info(f"{num_deleted} index listings have been removed from {index_name}")

            num_added = listing_repo.add_listings(index_id, ids_to_insert)
            if num_added > 0:
                logger.info(f"{num_added} index listings have been added to {index_name}")

        session.commit()
        return True
