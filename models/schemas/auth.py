from marshmallow import Schema, fields, pre_load, validate, EXCLUDE


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class CredentialsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True, validate=validate.Length(min=1, max=30))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "username" in data:
            data = {**data, "username": _strip(data["username"])}
        return data


class RegisterSchema(CredentialsSchema):
    pass


class LoginSchema(CredentialsSchema):
    pass


class RefreshTokenSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class UserOutSchema(Schema):
    """Public view of a user. The password hash is never dumped."""

    username = fields.String()
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class LoginOutSchema(Schema):
    user = fields.Nested(UserOutSchema)
    access_token = fields.String(data_key="accessToken")
    refresh_token = fields.String(data_key="refreshToken")


class TokenPairOutSchema(Schema):
    access_token = fields.String(data_key="accessToken")
    refresh_token = fields.String(data_key="refreshToken")
