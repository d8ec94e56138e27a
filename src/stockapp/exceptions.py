class StoreError(Exception):
    """Raised when the database driver or connection fails."""


class FeedError(Exception):
    """Raised when an upstream market data feed cannot be fetched or parsed."""
