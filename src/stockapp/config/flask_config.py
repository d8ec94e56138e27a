import os

from .app_config import (
    BCRYPT_LOG_ROUNDS,
    SYNC_SINGLE_TRANSACTION,
    USER_CREATE_SECRET,
    REFRESH_INTERVAL,
    UPDATER_DEADLINE,
)


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///stockapp.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    API_TITLE = "Stock App"
    API_VERSION = "v1"
    OPENAPI_VERSION = "3.0.3"
    OPENAPI_URL_PREFIX = "/"
    OPENAPI_SWAGGER_UI_PATH = "/swagger-ui"
    OPENAPI_SWAGGER_UI_URL = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"
    API_SPEC_OPTIONS = {
        "tags": [
            {"name": "Users", "description": "User accounts"},
            {"name": "Stocks", "description": "Quotes, indexes and exchanges"},
        ],
    }

    BCRYPT_LOG_ROUNDS = BCRYPT_LOG_ROUNDS
    USER_CREATE_SECRET = USER_CREATE_SECRET
    SYNC_SINGLE_TRANSACTION = SYNC_SINGLE_TRANSACTION
    REFRESH_INTERVAL = REFRESH_INTERVAL
    UPDATER_DEADLINE = UPDATER_DEADLINE
