from stockapp.db import db
from sqlalchemy import Index


class QuoteModel(db.Model):
    """Latest snapshot of a single stock or index"""
    __tablename__ = "stocks"

    id = db.Column("stock_id", db.Integer, db.Sequence("stocks_stock_id_seq"), primary_key=True)
    symbol = db.Column(db.String(64), nullable=False)
    exchange_id = db.Column(db.Integer, db.ForeignKey("exchanges.exchange_id"), nullable=False)

    open = db.Column(db.Float, nullable=True)
    volume = db.Column(db.Float, nullable=True)
    last_traded_price = db.Column("ltp", db.Float, nullable=True)
    previous_close = db.Column("prev_close", db.Float, nullable=True)
    high = db.Column(db.Float, nullable=True)
    low = db.Column(db.Float, nullable=True)

    type = db.Column(db.String(10), nullable=True)
    last_updated_at = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("exchange_id", "symbol", name="uq_stocks_exchange_symbol"),
        Index("idx_stocks_symbol", "symbol"),
    )

    @property
    def change(self):
        """Change in value from the previous day's close"""
        if self.last_traded_price is None or self.previous_close is None:
            return None
        return self.last_traded_price - self.previous_close

    def apply_snapshot(self, snapshot):
        self.open = snapshot.open
        self.volume = snapshot.volume
        self.last_traded_price = snapshot.last_traded_price
        self.previous_close = snapshot.previous_close
        self.high = snapshot.high
        self.low = snapshot.low
        self.type = snapshot.type.value
        self.last_updated_at = snapshot.last_updated_at

    def __repr__(self):
        return (
            f"<Quote {self.symbol} {self.type}(open={self.open}, ltp={self.last_traded_price}, "
            f"vol={self.volume}, high={self.high}, low={self.low}, prev_close={self.previous_close}, "
            f"last_updated_at={self.last_updated_at})>"
        )
