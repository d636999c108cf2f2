"""
Webhook blueprint (all routes require a bearer access token):
- POST /webhooks
- GET  /webhooks
- GET  /webhooks/count
- GET  /webhooks/<id>
"""
from __future__ import annotations

from flask import Blueprint, request, current_app

from api.responses import success_response
from models.schemas.common import WebhookListQuerySchema
from models.schemas.webhook import (
    WebhookCreateSchema,
    WebhookOutSchema,
    WebhookCreatedOutSchema,
)
from utils.decorators import jwt_required, request_timeout

bp = Blueprint("webhooks", __name__)

# Schemas
webhook_create_schema = WebhookCreateSchema()
webhook_out_schema = WebhookOutSchema()
webhooks_out_schema = WebhookOutSchema(many=True)
webhook_created_schema = WebhookCreatedOutSchema()
list_query_schema = WebhookListQuerySchema()


def _webhook_service():
    return current_app.extensions["webhook_service"]


@bp.post("/webhooks")
@request_timeout()
@jwt_required()
def create_webhook():
    """
    Store an inbound webhook event
    ---
    tags:
      - Webhooks
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [source, event, payload]
          properties:
            source: { type: string, example: github }
            event: { type: string, example: push }
            payload: { type: object, example: { repository: my-repo, branch: main } }
    responses:
      201:
        description: Created, returns the id
      400:
        description: Validation error
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = webhook_create_schema.load(payload)

    webhook = _webhook_service().ingest(data["source"], data["event"], data["payload"])
    return success_response(webhook_created_schema.dump(webhook), "Webhook received", 201)


@bp.get("/webhooks")
@request_timeout()
@jwt_required()
def list_webhooks():
    """
    List webhooks, most recent first
    ---
    tags:
      - Webhooks
    security:
      - Bearer: []
    parameters:
      - { in: query, name: page, type: integer, minimum: 1, default: 1 }
      - { in: query, name: limit, type: integer, minimum: 1, maximum: 100, default: 10 }
      - { in: query, name: source, type: string }
      - { in: query, name: event, type: string }
    responses:
      200:
        description: "OK: {data, pagination}"
      400:
        description: Invalid page or limit
      401:
        description: Unauthorized
    """
    query = list_query_schema.load(request.args)

    result = _webhook_service().list(**query)
    return success_response(
        {
            "data": webhooks_out_schema.dump(result.items),
            "pagination": result.pagination.to_dict(),
        },
        "Webhooks retrieved successfully",
        200,
    )


@bp.get("/webhooks/count")
@request_timeout()
@jwt_required()
def count_webhooks():
    """
    Total number of stored webhooks
    ---
    tags:
      - Webhooks
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    return success_response({"count": _webhook_service().count()}, "Webhook count", 200)


@bp.get("/webhooks/<webhook_id>")
@request_timeout()
@jwt_required()
def get_webhook(webhook_id: str):
    """
    Get a webhook by id
    ---
    tags:
      - Webhooks
    security:
      - Bearer: []
    parameters:
      - { in: path, name: webhook_id, type: string, required: true }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      404:
        description: Webhook not found
    """
    webhook = _webhook_service().get_by_id(webhook_id)
    return success_response(webhook_out_schema.dump(webhook), "Webhook retrieved successfully", 200)
