from marshmallow import Schema, fields, EXCLUDE


class UserSchema(Schema):
    """Public view of a user, never carries the password hash or salt"""
    id = fields.Int(dump_only=True)
    username = fields.Str(required=True)
    date_created = fields.DateTime(dump_only=True)


class UserFormSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    create = fields.Int(
        load_default=0,
        metadata={"description": "1 to create a new user"}
    )
    delete = fields.Int(
        load_default=0,
        metadata={"description": "1 to delete the user; neither flag updates the password"}
    )
    username = fields.Str(required=True)
    password = fields.Str(load_default=None, load_only=True)
    secret = fields.Str(
        load_default=None,
        load_only=True,
        metadata={"description": "Create-user secret, when the deployment requires one"}
    )


class SuccessSchema(Schema):
    success = fields.Str()
