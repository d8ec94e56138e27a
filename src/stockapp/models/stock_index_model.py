from stockapp.db import db


class StockIndexModel(db.Model):
    __tablename__ = "stock_indexes"

    id = db.Column("stock_index_id", db.Integer, db.Sequence("stock_indexes_stock_index_id_seq"), primary_key=True)
    exchange_id = db.Column(db.Integer, db.ForeignKey("exchanges.exchange_id"), nullable=False)
    index_name = db.Column(db.String(64), nullable=False)

    __table_args__ = (
        db.UniqueConstraint("exchange_id", "index_name", name="uq_stock_indexes_exchange_name"),
    )

    def __repr__(self):
        return f"<StockIndex {self.id} - {self.index_name}>"


class IndexListingModel(db.Model):
    """Membership of a stock in an index"""
    __tablename__ = "index_listings"

    index_id = db.Column(db.Integer, db.ForeignKey("stock_indexes.stock_index_id"), primary_key=True)
    stock_id = db.Column(db.Integer, db.ForeignKey("stocks.stock_id"), primary_key=True)

    def __repr__(self):
        return f"<IndexListing {self.index_id} -> {self.stock_id}>"
