"""
Registration, login and token refresh.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from models.repositories import UserRepository
from models.user import User
from services.tokens import TokenManager, TokenPair
from utils.errors import Conflict, NotFound, Unauthorized
from utils.log import log_operation
from utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = "User registered successfully"


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


class AuthService:
    def __init__(self, users: UserRepository, tokens: TokenManager):
        self.users = users
        self.tokens = tokens

    def register(self, username: str, password: str) -> str:
        with log_operation(logger, "register", username=username, password=password):
            if self.users.exists_by_username(username):
                raise Conflict("Username already exists")
            # A concurrent registration can still slip past the check above;
            # the unique index turns that into Conflict inside create()
            self.users.create(
                username=username,
                password_hash=hash_password(password),
                user_id=str(uuid.uuid4()),
            )
            return REGISTERED_MESSAGE

    def login(self, username: str, password: str) -> LoginResult:
        with log_operation(logger, "login", username=username, password=password):
            user = self.users.find_by_username(username)
            if user is None or not verify_password(password, user.password_hash):
                raise Unauthorized("Invalid credentials")
            pair = self.tokens.issue_pair(user)
            return LoginResult(user, pair.access_token, pair.refresh_token)

    def refresh(self, refresh_token: str) -> TokenPair:
        return self.tokens.rotate(refresh_token)

    def logout(self, user_id: str) -> int:
        """Revoke every refresh token the user holds."""
        return self.tokens.revoke_user_tokens(user_id)

    def get_user(self, user_id: str) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user
