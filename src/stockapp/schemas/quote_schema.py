from marshmallow import Schema, fields


class QuoteSchema(Schema):
    id = fields.Int(dump_only=True)
    symbol = fields.Str(required=True)
    exchange_id = fields.Int(required=True)
    type = fields.Str(allow_none=True)
    open = fields.Float(allow_none=True)
    volume = fields.Float(allow_none=True)
    last_traded_price = fields.Float(allow_none=True)
    previous_close = fields.Float(allow_none=True)
    high = fields.Float(allow_none=True)
    low = fields.Float(allow_none=True)
    change = fields.Float(dump_only=True, allow_none=True)
    last_updated_at = fields.DateTime(allow_none=True)


class QuoteLiteSchema(Schema):
    exchange_id = fields.Int(required=True)
    symbol = fields.Str(required=True)
    type = fields.Str(required=True)


class IndexMembersSchema(Schema):
    items = fields.List(fields.Nested(QuoteSchema))


class IndexListSchema(Schema):
    indexes = fields.List(fields.Nested(QuoteSchema))
