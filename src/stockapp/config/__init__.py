from .app_config import (
    REFRESH_INTERVAL,
    UPDATER_DEADLINE,
    EXCHANGES_FILE,
    SYNC_SINGLE_TRANSACTION,
    NSE_BASE_URL,
    NSE_REQUEST_TIMEOUT,
    NSE_USER_AGENT,
    BCRYPT_LOG_ROUNDS,
    USER_CREATE_SECRET,
    MIN_SEARCH_KEY_SIZE,
)
from .flask_config import Config
from .logger_config import setup_logger


__all__ = [
    #AppConfig
    "REFRESH_INTERVAL",
    "UPDATER_DEADLINE",
    "EXCHANGES_FILE",
    "SYNC_SINGLE_TRANSACTION",
    "NSE_BASE_URL",
    "NSE_REQUEST_TIMEOUT",
    "NSE_USER_AGENT",
    "BCRYPT_LOG_ROUNDS",
    "USER_CREATE_SECRET",
    "MIN_SEARCH_KEY_SIZE",

    #FlaskConfig
    "Config",

    #Logger Config
    "setup_logger",
]
