"""
Access/refresh token lifecycle.

Access tokens are short-lived and stateless. Refresh tokens are also signed
JWTs but every one of them is tracked in the refresh_tokens table, and each
is good for exactly one rotation: a successful refresh deletes the presented
row before the replacement pair is issued. Expired rows are deleted when
they are presented, and can be purged in bulk.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from models.repositories import RefreshTokenRepository, UserRepository
from models.user import User
from utils.errors import Unauthorized
from utils.log import log_operation
from utils.security import TokenExpired, TokenInvalid, decode_token, encode_token

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenIdentity:
    user_id: str
    username: str


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenManager:
    def __init__(
        self,
        secret: str,
        refresh_tokens: RefreshTokenRepository,
        users: UserRepository,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise ValueError("A token signing secret is required")
        self.secret = secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.refresh_tokens = refresh_tokens
        self.users = users

    @classmethod
    def from_config(cls, config, refresh_tokens: RefreshTokenRepository, users: UserRepository):
        return cls(
            secret=config["JWT_SECRET"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            access_ttl=config["ACCESS_TOKEN_EXPIRES"],
            refresh_ttl=config["REFRESH_TOKEN_EXPIRES"],
            refresh_tokens=refresh_tokens,
            users=users,
        )

    def issue_access_token(self, user: User) -> str:
        token, _ = encode_token(
            {"userId": user.id, "username": user.username, "type": ACCESS},
            self.secret,
            self.algorithm,
            self.access_ttl,
        )
        return token

    def issue_refresh_token(self, user: User) -> str:
        # The stored expiry is the token's own exp claim, not a second clock
        token, expires_at = encode_token(
            {"userId": user.id, "type": REFRESH},
            self.secret,
            self.algorithm,
            self.refresh_ttl,
        )
        self.refresh_tokens.save(token, user.id, expires_at)
        return token

    def issue_pair(self, user: User) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(user),
            refresh_token=self.issue_refresh_token(user),
        )

    def validate_access_token(self, token: str) -> TokenIdentity:
        """Return the identity embedded in an access token, or raise Unauthorized.

        Refresh tokens are rejected here even though they carry a valid signature.
        """
        try:
            claims = decode_token(token, self.secret, self.algorithm)
        except (TokenExpired, TokenInvalid):
            raise Unauthorized("Invalid or expired token")
        if claims.get("type") != ACCESS:
            raise Unauthorized("Invalid token type")
        user_id, username = claims.get("userId"), claims.get("username")
        if not user_id or not username:
            raise Unauthorized("Invalid token")
        return TokenIdentity(user_id=user_id, username=username)

    def rotate(self, refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new access/refresh pair (one use only)."""
        with log_operation(logger, "rotate", refreshToken=refresh_token):
            try:
                claims = decode_token(refresh_token, self.secret, self.algorithm)
            except TokenExpired:
                raise Unauthorized("Refresh token has expired")
            except TokenInvalid as exc:
                raise Unauthorized(f"Invalid refresh token: {exc}")

            if claims.get("type") != REFRESH:
                raise Unauthorized("Invalid token type")

            stored = self.refresh_tokens.find_by_token(refresh_token)
            if stored is None:
                raise Unauthorized("Refresh token not found")

            if stored.is_expired:
                self.refresh_tokens.delete(refresh_token)
                raise Unauthorized("Refresh token expired")

            user = self.users.find_by_id(claims.get("userId"))
            if user is None:
                raise Unauthorized("User not found")

            # Only the request whose delete removes the row may rotate it
            if not self.refresh_tokens.delete(refresh_token):
                raise Unauthorized("Refresh token not found")
            return self.issue_pair(user)

    def revoke_user_tokens(self, user_id: str) -> int:
        with log_operation(logger, "revoke_user_tokens", user_id=user_id):
            return self.refresh_tokens.delete_by_user_id(user_id)

    def purge_expired(self) -> int:
        with log_operation(logger, "purge_expired"):
            return self.refresh_tokens.delete_expired()
