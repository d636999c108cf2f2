from marshmallow import Schema, fields, validate, EXCLUDE

MAX_LIMIT = 100


class PaginationQuerySchema(Schema):
    """page/limit query parameters. Out-of-range values are rejected, not clamped."""

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(load_default=10, validate=validate.Range(min=1, max=MAX_LIMIT))


class WebhookListQuerySchema(PaginationQuerySchema):
    source = fields.String(load_default=None, validate=validate.Length(min=1))
    event = fields.String(load_default=None, validate=validate.Length(min=1))
