from .quote_schema import QuoteSchema, QuoteLiteSchema, IndexMembersSchema, IndexListSchema
from .exchange_schema import ExchangeSchema, ExchangeListSchema, ExchangeQuerySchema, IndexQuerySchema
from .search_schema import SearchQuerySchema, SearchResultSchema
from .user_schema import UserSchema, UserFormSchema, SuccessSchema

__all__ = [
    "QuoteSchema",
    "QuoteLiteSchema",
    "IndexMembersSchema",
    "IndexListSchema",
    "ExchangeSchema",
    "ExchangeListSchema",
    "ExchangeQuerySchema",
    "IndexQuerySchema",
    "SearchQuerySchema",
    "SearchResultSchema",
    "UserSchema",
    "UserFormSchema",
    "SuccessSchema",
]
