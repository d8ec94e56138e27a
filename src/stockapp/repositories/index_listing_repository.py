from typing import Optional

from sqlalchemy import text, delete
from sqlalchemy.orm import Session

from stockapp.db import db
from stockapp.models import IndexListingModel


class IndexListingRepository:

    ADD_LISTING_QRY = text(
        "INSERT INTO index_listings (index_id, stock_id) VALUES (:index_id, :stock_id)"
    )

    def __init__(self, session: Optional[Session] = None):
        self.session = session if session is not None else db.session

    def delete_listings(self, index_id, stock_ids):
        """
        Remove listings of the given stocks from an index.

        Returns:
            int: number of rows deleted, 0 without issuing a query when stock_ids is empty
        """
        stock_ids = list(stock_ids)
        if not stock_ids:
            return 0
        result = self.session.execute(
            delete(IndexListingModel).where(
                IndexListingModel.index_id == index_id,
                IndexListingModel.stock_id.in_(stock_ids)
            ).execution_options(synchronize_session=False)
        )
        return result.rowcount

    def add_listings(self, index_id, stock_ids):
        params = [{"index_id": index_id, "stock_id": stock_id} for stock_id in sorted(stock_ids)]
        if not params:
            return 0
        self.session.execute(self.ADD_LISTING_QRY, params)
        return len(params)
