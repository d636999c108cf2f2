"""
Webhook ingestion and listing.

Payloads are stored as-is. Listing is newest first with a separate count
query feeding the pagination metadata.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List

from models.repositories import WebhookRepository
from models.webhook import Webhook
from utils.errors import InvalidInput, NotFound
from utils.log import log_operation

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
        }


@dataclass(frozen=True)
class WebhookPage:
    items: List[Webhook]
    pagination: Pagination


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"{name} is required")
    return value


class WebhookService:
    def __init__(self, webhooks: WebhookRepository):
        self.webhooks = webhooks

    def ingest(self, source: str, event: str, payload: Any) -> Webhook:
        with log_operation(logger, "ingest", source=source, event=event):
            _require_text("source", source)
            _require_text("event", event)
            return self.webhooks.create(source=source, event=event, payload=payload)

    def get_by_id(self, webhook_id: str) -> Webhook:
        with log_operation(logger, "get_by_id", id=webhook_id):
            webhook = self.webhooks.find_by_id(webhook_id)
            if webhook is None:
                raise NotFound("Webhook not found")
            return webhook

    def list(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        source: str | None = None,
        event: str | None = None,
    ) -> WebhookPage:
        with log_operation(logger, "list", page=page, limit=limit, source=source, event=event):
            if page < 1:
                raise InvalidInput("page must be at least 1")
            if not 1 <= limit <= MAX_LIMIT:
                raise InvalidInput(f"limit must be between 1 and {MAX_LIMIT}")
            items = self.webhooks.find_all(page=page, limit=limit, source=source, event=event)
            total = self.webhooks.count(source=source, event=event)
            return WebhookPage(items=items, pagination=Pagination(page, limit, total))

    def count(self) -> int:
        return self.webhooks.count()
