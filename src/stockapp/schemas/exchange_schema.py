from marshmallow import Schema, fields


class ExchangeSchema(Schema):
    id = fields.Int(dump_only=True)
    code = fields.Str(required=True)
    title = fields.Str(allow_none=True)


class ExchangeListSchema(Schema):
    exchanges = fields.List(fields.Nested(ExchangeSchema))


class ExchangeQuerySchema(Schema):
    exids = fields.Str(
        required=True,
        metadata={"description": "Comma separated exchange ids", "example": "1,2"}
    )


class IndexQuerySchema(Schema):
    exid = fields.Int(
        required=True,
        metadata={"description": "Exchange id", "example": 1}
    )
