from datetime import datetime

from stockapp.db import db


class UserModel(db.Model):
    __tablename__ = "users"

    id = db.Column("user_id", db.Integer, db.Sequence("users_user_id_seq"), primary_key=True)
    username = db.Column(db.String(64), nullable=False, unique=True)
    password_hash = db.Column(db.String(128), nullable=False)
    password_salt = db.Column(db.String(64), nullable=False)
    date_created = db.Column(db.DateTime, nullable=False, default=datetime.now)

    def __repr__(self):
        return f"<User {self.id} - {self.username}>"
