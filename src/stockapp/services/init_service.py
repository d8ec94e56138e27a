from stockapp.adaptors import INDEXERS
from stockapp.config import setup_logger
from stockapp.repositories import ExchangeRepository, StockIndexRepository
from stockapp.utils.database_manager import DatabaseManager

logger = setup_logger(name="InitService")


class InitService:
    """Seeds exchanges and their indexes. Safe to run repeatedly."""

    def __init__(self, indexer_classes=None):
        if indexer_classes is None:
            indexer_classes = INDEXERS.values()
        self.indexer_classes = list(indexer_classes)

    def seed_defaults(self):
        """
        Insert every exchange known to an indexer, and its indexes, if missing.

        Returns:
            dict: counts of exchanges and indexes created
        """
        created = {"exchanges": 0, "indexes": 0}
        with DatabaseManager.session_scope() as session:
            exchange_repo = ExchangeRepository(session)
            index_repo = StockIndexRepository(session)

            for indexer_cls in self.indexer_classes:
                exchange = exchange_repo.get_by_code(indexer_cls.exchange_code)
                if exchange is None:
                    exchange = exchange_repo.add(indexer_cls.exchange_code, indexer_cls.exchange_title)
                    created["exchanges"] += 1
                    logger.info(f"Seeded exchange {exchange.code} ({exchange.id})")

                known = set(index_repo.get_index_names(exchange.id))
                for index_name in indexer_cls().get_exchange_indexes():
                    if index_name in known:
                        continue
                    index_repo.add(exchange.id, index_name)
                    created["indexes"] += 1
                    logger.info(f"Seeded index {index_name} on {exchange.code}")

            session.commit()
        return created
