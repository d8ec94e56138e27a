from marshmallow import Schema, fields

from .quote_schema import QuoteLiteSchema


class SearchQuerySchema(Schema):
    substr = fields.Str(
        load_default="",
        metadata={"description": "Part of a symbol, at least 2 characters", "example": "REL"}
    )


class SearchResultSchema(Schema):
    results = fields.List(fields.Nested(QuoteLiteSchema))
