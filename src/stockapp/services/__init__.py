from .init_service import InitService
from .sync_service import SyncService
from .scheduler_service import UpdateScheduler
from .user_service import UserService, UserResult, InvalidUser, InvalidUserKind
from .quote_service import QuoteService


__all__ = [
    "InitService",
    "SyncService",
    "UpdateScheduler",
    "UserService",
    "UserResult",
    "InvalidUser",
    "InvalidUserKind",
    "QuoteService",
]
