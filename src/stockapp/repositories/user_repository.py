from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from stockapp.db import db
from stockapp.models import UserModel


class UserRepository:

    def __init__(self, session: Optional[Session] = None):
        self.session = session if session is not None else db.session

    def get_by_id(self, user_id):
        return self.session.get(UserModel, user_id)

    def get_by_username(self, username):
        return self.session.query(UserModel).filter(
            UserModel.username == username
        ).one_or_none()

    def add(self, username, password_hash, password_salt):
        """Insert a user and return it with its generated id"""
        user = UserModel(
            username=username,
            password_hash=password_hash,
            password_salt=password_salt,
            date_created=datetime.now()
        )
        self.session.add(user)
        self.session.flush()
        return user

    def merge(self, user):
        return self.session.merge(user)

    def delete(self, user):
        self.session.delete(user)
