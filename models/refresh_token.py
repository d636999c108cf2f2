"""
RefreshToken model: one row per outstanding refresh token so they can be
rotated and revoked.
Fields:
- token (primary key) - the signed JWT itself
- user_id (String(36)) - FK to users.id
- expires_at - same instant as the token's exp claim
- created_at

Rows are never updated: use, expiry detection and revocation all delete.
"""
from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import Base, UTCDateTime
from utils.security import utcnow


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    token = Column(Text, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(UTCDateTime(), nullable=False, index=True)
    created_at = Column(UTCDateTime(), default=utcnow, nullable=False)

    user = relationship("User", back_populates="refresh_tokens")

    @property
    def is_expired(self) -> bool:
        return self.expires_at < utcnow()

    def __repr__(self):
        return f"<RefreshToken user_id={self.user_id} expires_at={self.expires_at}>"
