"""
Authentication blueprint:
- POST /auth/register
- POST /auth/login
- POST /auth/refresh
- POST /auth/logout
- GET  /auth/me

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues short-lived access tokens and longer-lived refresh tokens (JWTs signed with HS256)
- Stores refresh tokens in DB (RefreshToken model); each one can be used once
"""
from __future__ import annotations

from flask import Blueprint, request, g, current_app

from api.responses import success_response
from models.schemas.auth import (
    RegisterSchema,
    LoginSchema,
    RefreshTokenSchema,
    UserOutSchema,
    LoginOutSchema,
    TokenPairOutSchema,
)
from utils.decorators import jwt_required, request_timeout

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
user_out_schema = UserOutSchema()
login_out_schema = LoginOutSchema()
token_pair_out_schema = TokenPairOutSchema()


def _auth_service():
    return current_app.extensions["auth_service"]


@bp.post("/auth/register")
@request_timeout()
def register():
    """
    Register a new user.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [username, password]
          properties:
            username: { type: string, maxLength: 30 }
            password: { type: string }
    responses:
      201:
        description: User registered successfully
      400:
        description: Validation error
      409:
        description: Username already exists
    """
    payload = request.get_json(silent=True) or {}
    data = register_schema.load(payload)

    message = _auth_service().register(data["username"], data["password"])
    return success_response({"message": message}, message, 201)


@bp.post("/auth/login")
@request_timeout()
def login():
    """
    Login: return the user, an access token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [username, password]
           properties:
             username: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      400:
        description: Validation error
      401:
        description: Invalid credentials
    """
    payload = request.get_json(silent=True) or {}
    data = login_schema.load(payload)

    result = _auth_service().login(data["username"], data["password"])
    return success_response(login_out_schema.dump(result), "User logged in successfully", 200)


@bp.post("/auth/refresh")
@request_timeout()
def refresh():
    """
    Use a refresh token to obtain new access and refresh tokens (rotation)
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [refreshToken]
           properties:
             refreshToken: { type: string }
    responses:
      200:
        description: New token pair; the presented refresh token is consumed
      400:
        description: Validation error
      401:
        description: Invalid, expired or already used refresh token
    """
    payload = request.get_json(silent=True) or {}
    data = refresh_schema.load(payload)

    pair = _auth_service().refresh(data["refresh_token"])
    return success_response(token_pair_out_schema.dump(pair), "Token refreshed successfully", 200)


@bp.post("/auth/logout")
@request_timeout()
@jwt_required()
def logout():
    """
    Logout: revokes every refresh token of the current user
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: Refresh tokens revoked
      401:
        description: Unauthorized
    """
    _auth_service().logout(g.current_user.user_id)
    message = "Logged out successfully"
    return success_response({"message": message}, message, 200)


@bp.get("/auth/me")
@request_timeout()
@jwt_required()
def me():
    """
    Get current user info.
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      404:
        description: The token's user no longer exists
    """
    user = _auth_service().get_user(g.current_user.user_id)
    return success_response(user_out_schema.dump(user), "Current user", 200)
