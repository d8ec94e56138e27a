"""
Database Manager

Scoped sessions for work that runs outside the request-bound db.session
(the updater thread, services that bracket their own transactions).
"""
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockapp.db import db
from stockapp.config import setup_logger
from stockapp.exceptions import StoreError

logger = setup_logger(name="DatabaseManager")


class DatabaseManager:
    """
    Hand out short-lived sessions bound to the application's engine.

    Must be used inside a Flask application context.
    """

    @classmethod
    def create_session(cls) -> Session:
        return Session(bind=db.engine, expire_on_commit=False)

    @classmethod
    @contextmanager
    def session_scope(cls):
        """
        Yield a session that is always closed on exit.

        Any SQLAlchemy error rolls back the open transaction and is re-raised
        as StoreError. Callers commit explicitly.
        """
        session = cls.create_session()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Store operation failed, rolled back: {e}")
            raise StoreError(str(e)) from e
        finally:
            session.close()
