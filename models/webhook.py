from sqlalchemy import Column, String, JSON, Index

from models.base_model import Base, BaseModel, UTCDateTime
from utils.security import utcnow


class Webhook(BaseModel, Base):
    """An inbound third-party event, stored as received. Never updated."""

    __tablename__ = "webhooks"

    source = Column(String(255), nullable=False, index=True)
    event = Column(String(255), nullable=False, index=True)
    payload = Column(JSON, nullable=True)  # opaque; no schema enforced
    received_at = Column(UTCDateTime(), default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_webhooks_received_at_id", "received_at", "id"),
    )

    def __repr__(self):
        return f"<Webhook id={self.id} source={self.source} event={self.event}>"
