from models.base_model import Base, BaseModel, TimestampMixin
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship


class User(BaseModel, TimestampMixin, Base):
    __tablename__ = "users"
    # Uniqueness is enforced here; the service pre-check alone is racy
    username = Column(String(30), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User username={self.username}>"
