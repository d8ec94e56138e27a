import os


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name, default=None):
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


# Updater
REFRESH_INTERVAL = _env_float("REFRESH_INTERVAL", 60.0)  # seconds between ticks
UPDATER_DEADLINE = _env_float("UPDATER_DEADLINE")  # seconds, None runs until interrupted
EXCHANGES_FILE = os.getenv("EXCHANGES_FILE", "exchanges.txt")
SYNC_SINGLE_TRANSACTION = _env_bool("SYNC_SINGLE_TRANSACTION", False)

# NSE live watch feed
NSE_BASE_URL = os.getenv(
    "NSE_BASE_URL",
    "https://www.nseindia.com/live_market/dynaContent/live_watch/stock_watch",
)
NSE_REQUEST_TIMEOUT = _env_float("NSE_REQUEST_TIMEOUT", 10.0)
NSE_USER_AGENT = os.getenv(
    "NSE_USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36",
)

# Users
BCRYPT_LOG_ROUNDS = int(os.getenv("BCRYPT_LOG_ROUNDS", "12"))
USER_CREATE_SECRET = os.getenv("USER_CREATE_SECRET") or None
MIN_SEARCH_KEY_SIZE = 2
