from marshmallow import Schema, fields, validate, validates, ValidationError, EXCLUDE


class WebhookCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    source = fields.String(required=True, validate=validate.Length(min=1, max=255))
    event = fields.String(required=True, validate=validate.Length(min=1, max=255))
    payload = fields.Raw(required=True, allow_none=False)

    @validates("source")
    def validate_source(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("source must not be blank.")

    @validates("event")
    def validate_event(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("event must not be blank.")


class WebhookOutSchema(Schema):
    id = fields.String()
    source = fields.String()
    event = fields.String()
    payload = fields.Raw()
    received_at = fields.DateTime(data_key="receivedAt")


class WebhookCreatedOutSchema(Schema):
    id = fields.String()
