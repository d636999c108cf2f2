"""
Repositories: the narrow persistence interface the services consume.

Each repository wraps the shared DBStorage and owns the queries for one model.
Commits happen here so a service call is one unit of work per operation.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError

from models.db_storage import DBStorage
from models.refresh_token import RefreshToken
from models.user import User
from models.webhook import Webhook
from utils.errors import Conflict
from utils.security import utcnow


class UserRepository:
    def __init__(self, storage: DBStorage):
        self.storage = storage

    def find_by_username(self, username: str) -> Optional[User]:
        session = self.storage.get_session()
        return session.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.storage.get(User, user_id)

    def exists_by_username(self, username: str) -> bool:
        session = self.storage.get_session()
        return session.query(User.id).filter(User.username == username).count() > 0

    def create(self, username: str, password_hash: str, user_id: str | None = None) -> User:
        """Insert a user; a unique-constraint violation surfaces as Conflict."""
        user = User(id=user_id, username=username, password_hash=password_hash)
        self.storage.new(user)
        try:
            self.storage.save()
        except IntegrityError:
            raise Conflict("Username already exists")
        return user

    def count(self) -> int:
        return self.storage.count(User)


class RefreshTokenRepository:
    def __init__(self, storage: DBStorage):
        self.storage = storage

    def save(self, token: str, user_id: str, expires_at: datetime) -> RefreshToken:
        row = RefreshToken(token=token, user_id=user_id, expires_at=expires_at)
        self.storage.new(row)
        self.storage.save()
        return row

    def find_by_token(self, token: str) -> Optional[RefreshToken]:
        return self.storage.get_session().get(RefreshToken, token)

    def delete(self, token: str) -> int:
        """Delete one token and return the number of rows removed (0 or 1).

        Deleting a token that is already gone is not an error.
        """
        session = self.storage.get_session()
        deleted = session.query(RefreshToken).filter(RefreshToken.token == token).delete(
            synchronize_session="fetch"
        )
        self.storage.save()
        return deleted

    def delete_by_user_id(self, user_id: str) -> int:
        session = self.storage.get_session()
        deleted = session.query(RefreshToken).filter(RefreshToken.user_id == user_id).delete(
            synchronize_session="fetch"
        )
        self.storage.save()
        return deleted

    def delete_expired(self) -> int:
        session = self.storage.get_session()
        deleted = session.query(RefreshToken).filter(RefreshToken.expires_at < utcnow()).delete(
            synchronize_session="fetch"
        )
        self.storage.save()
        return deleted

    def count(self) -> int:
        return self.storage.count(RefreshToken)


class WebhookRepository:
    def __init__(self, storage: DBStorage):
        self.storage = storage

    def _filtered(self, source: str | None = None, event: str | None = None):
        query = self.storage.get_session().query(Webhook)
        if source:
            query = query.filter(Webhook.source == source)
        if event:
            query = query.filter(Webhook.event == event)
        return query

    def create(self, source: str, event: str, payload: Any) -> Webhook:
        webhook = Webhook(source=source, event=event, payload=payload)
        self.storage.new(webhook)
        self.storage.save()
        return webhook

    def find_by_id(self, webhook_id: str) -> Optional[Webhook]:
        return self.storage.get(Webhook, webhook_id)

    def find_all(
        self,
        page: int | None = None,
        limit: int | None = None,
        source: str | None = None,
        event: str | None = None,
    ) -> List[Webhook]:
        """Most recent first; id breaks ties between equal timestamps."""
        query = self._filtered(source, event).order_by(
            Webhook.received_at.desc(), Webhook.id.desc()
        )
        if page and limit:
            query = query.offset((page - 1) * limit)
        if limit:
            query = query.limit(limit)
        return query.all()

    def count(self, source: str | None = None, event: str | None = None) -> int:
        return self._filtered(source, event).count()

    def delete(self, webhook_id: str) -> bool:
        webhook = self.find_by_id(webhook_id)
        if webhook is None:
            return False
        self.storage.delete(webhook)
        self.storage.save()
        return True
