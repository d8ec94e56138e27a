"""
User Service

Account creation, password rotation, deletion and password verification.
Passwords are hashed with bcrypt; the salt is generated by bcrypt and also
embedded in the stored hash.
"""
import re
from enum import Enum
from dataclasses import dataclass
from typing import Optional

import bcrypt

from stockapp.config import setup_logger, BCRYPT_LOG_ROUNDS
from stockapp.exceptions import StoreError
from stockapp.repositories import UserRepository
from stockapp.utils.database_manager import DatabaseManager

logger = setup_logger(name="UserService")

USERNAME_LENGTH_MIN = 5
PASSWORD_LENGTH_MIN = 8
# bcrypt only looks at the first 72 bytes
PASSWORD_BYTES_MAX = 72
VALID_INPUT_PATTERN = re.compile(r"[0-9A-Za-z_-]+")


class InvalidUserKind(Enum):
    USERNAME_INVALID = "USERNAME_INVALID"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    PASSWORD_INVALID = "PASSWORD_INVALID"


@dataclass
class InvalidUser:
    kind: InvalidUserKind
    message: str


@dataclass
class UserResult:
    """
    Outcome of create_user.

    Attributes:
        user_id: id of the new user when created
        error: validation failure, None otherwise. Both empty means a store failure.
    """
    user_id: Optional[int] = None
    error: Optional[InvalidUser] = None

    @property
    def ok(self):
        return self.user_id is not None


def _is_valid_input(value, min_length):
    if value is None or len(value) < min_length:
        return False
    return VALID_INPUT_PATTERN.fullmatch(value) is not None


class UserService:

    def __init__(self, log_rounds=None):
        self.log_rounds = log_rounds or BCRYPT_LOG_ROUNDS

    @staticmethod
    def validate_username(username):
        return _is_valid_input(username, USERNAME_LENGTH_MIN)

    @staticmethod
    def validate_password(password):
        if not _is_valid_input(password, PASSWORD_LENGTH_MIN):
            return False
        return len(password.encode("utf-8")) <= PASSWORD_BYTES_MAX

    def _hash_password(self, password):
        salt = bcrypt.gensalt(rounds=self.log_rounds)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("ascii"), salt.decode("ascii")

    def load_by_username(self, username):
        with DatabaseManager.session_scope() as session:
            return UserRepository(session).get_by_username(username)

    def create_user(self, username, password):
        """
        Create a user after validating username and password.

        Returns:
            UserResult: new id, or the validation error; neither on store failure
        """
        if not self.validate_username(username):
            return UserResult(error=InvalidUser(
                InvalidUserKind.USERNAME_INVALID,
                "Invalid username. Username must contain only letters, digits, '-' or '_' "
                f"and be at least {USERNAME_LENGTH_MIN} characters long."
            ))
        if not self.validate_password(password):
            return UserResult(error=InvalidUser(
                InvalidUserKind.PASSWORD_INVALID,
                "Invalid password. Password must contain only letters, digits, '-' or '_' "
                f"and be {PASSWORD_LENGTH_MIN} to {PASSWORD_BYTES_MAX} characters long."
            ))

        try:
            with DatabaseManager.session_scope() as session:
                user_repo = UserRepository(session)
                if user_repo.get_by_username(username) is not None:
                    return UserResult(error=InvalidUser(
                        InvalidUserKind.USERNAME_TAKEN,
                        "Username is already taken."
                    ))

                password_hash, password_salt = self._hash_password(password)
                user = user_repo.add(username, password_hash, password_salt)
                session.commit()
                logger.info(f"Created user {username} ({user.id})")
                return UserResult(user_id=user.id)
        except StoreError as e:
            logger.error(f"Failed to create user {username}: {e}")
            return UserResult()

    def update_password(self, username, new_password):
        """Rotate salt and hash for an existing user. Returns True on success."""
        if not self.validate_password(new_password):
            return False
        try:
            with DatabaseManager.session_scope() as session:
                user_repo = UserRepository(session)
                user = user_repo.get_by_username(username)
                if user is None:
                    return False
                user.password_hash, user.password_salt = self._hash_password(new_password)
                user_repo.merge(user)
                session.commit()
                return True
        except StoreError as e:
            logger.error(f"Failed to update password for {username}: {e}")
            return False

    def delete_user(self, username):
        """
        Delete a user by username.

        Returns:
            bool: True if deleted, False if no such user or the store failed
        """
        try:
            with DatabaseManager.session_scope() as session:
                user_repo = UserRepository(session)
                user = user_repo.get_by_username(username)
                if user is None:
                    return False
                user_repo.delete(user)
                session.commit()
                logger.info(f"Deleted user {username}")
                return True
        except StoreError as e:
            logger.error(f"Failed to delete user {username}: {e}")
            return False

    def verify_password(self, username, candidate):
        """
        Check a candidate password against the stored hash.

        Raises StoreError when the user cannot be loaded.
        """
        if candidate is None:
            return False
        candidate_bytes = candidate.encode("utf-8")
        if len(candidate_bytes) > PASSWORD_BYTES_MAX:
            return False

        user = self.load_by_username(username)
        if user is None:
            return False
        return bcrypt.checkpw(candidate_bytes, user.password_hash.encode("ascii"))
