from stockapp.db import db


class ExchangeModel(db.Model):
    """A trading venue, e.g. NSE. Seeded, never written by the updater."""
    __tablename__ = "exchanges"

    id = db.Column("exchange_id", db.Integer, db.Sequence("exchanges_exchange_id_seq"), primary_key=True)
    code = db.Column(db.String(16), nullable=False, unique=True)
    title = db.Column(db.String(255), nullable=True)

    def __repr__(self):
        return f"<Exchange {self.id} - {self.code}>"
