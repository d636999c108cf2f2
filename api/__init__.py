import logging

from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from .extensions import limiter
from models import storage  # DBStorage singleton (scoped_session)
from models.repositories import UserRepository, RefreshTokenRepository, WebhookRepository
from services.auth import AuthService
from services.tokens import TokenManager
from services.webhooks import WebhookService

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Webhook Inbox API",
        "version": "1.0.0",
        "description": "Receives, stores and lists third-party webhook events behind JWT authentication.",
    },
    "basePath": "/",
    "schemes": ["http", "https"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def init_services(app: Flask) -> None:
    """Build repositories and services from app.config and expose them on app.extensions."""
    users = UserRepository(storage)
    refresh_tokens = RefreshTokenRepository(storage)
    webhooks = WebhookRepository(storage)

    token_manager = TokenManager.from_config(app.config, refresh_tokens=refresh_tokens, users=users)
    app.extensions["token_manager"] = token_manager
    app.extensions["auth_service"] = AuthService(users, token_manager)
    app.extensions["webhook_service"] = WebhookService(webhooks)


def create_app(config_name: str | None = None, **overrides) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    ``overrides`` are applied on top of the selected config class (tests use this
    for short token lifetimes and the like).
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)
    app.config.setdefault(
        "RATELIMIT_DEFAULT",
        f"{app.config['RATE_LIMIT_MAX']} per {app.config['RATE_LIMIT_WINDOW_SECONDS']} second",
    )

    configure_logging(app.config["LOG_LEVEL"])

    # Cross-Origin Resource Sharing
    CORS(
        app,
        resources={r"/*": {"origins": app.config["CORS_ORIGINS"]}},
        methods=app.config["CORS_METHODS"],
        allow_headers=app.config["CORS_ALLOWED_HEADERS"],
        expose_headers=app.config["CORS_EXPOSED_HEADERS"],
        supports_credentials=app.config["CORS_CREDENTIALS"],
        max_age=app.config["CORS_MAX_AGE"],
    )

    limiter.init_app(app)

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    storage.configure(app.config["DATABASE_URL"], echo=app.config["DATABASE_ECHO"])
    init_services(app)

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .webhooks import bp as webhooks_bp

    prefix = app.config["API_PREFIX"].rstrip("/")
    app.register_blueprint(health_bp, url_prefix=prefix)
    app.register_blueprint(auth_bp, url_prefix=prefix)
    app.register_blueprint(webhooks_bp, url_prefix=prefix)

    from .cli import register_cli
    register_cli(app)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Webhook Inbox API",
            "docs": "/apidocs/",
            "health": f"{prefix}/health",
        }, 200

    return app
