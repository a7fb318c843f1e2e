"""
Application Factory

Builds the FairGrade Flask application: configuration, extensions,
blueprints, error handlers and the grading services.
"""

from typing import Any, Dict, Optional

from flask import Flask
from flask_cors import CORS
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

from src.config.unified_config import UnifiedConfig
from src.database.models import db
from src.services.auth_service import AuthService
from src.services.grading_service import GradingService
from src.services.llm_service import AIClient
from src.services.ocr_service import OCRService
from src.services.results_store import GradingSessionStore
from utils.logger import logger

csrf = CSRFProtect()
login_manager = LoginManager()


def create_app(
    config_name: str = "development", overrides: Optional[Dict[str, Any]] = None
) -> Flask:
    """
    Application factory function.

    Args:
        config_name: Configuration environment name ("development",
            "production" or "testing")
        overrides: Extra Flask config values applied last

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__, template_folder="templates")

    config = UnifiedConfig()
    app.config.update(config.get_flask_config())

    if config_name == "testing":
        app.config["TESTING"] = True
        app.config["WTF_CSRF_ENABLED"] = False
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"

    if overrides:
        app.config.update(overrides)

    _init_extensions(app)
    _init_services(app)
    _register_blueprints(app)
    _setup_error_handlers(app)
    create_database_tables(app)

    logger.info(f"Flask application created successfully (config: {config_name})")

    return app


def _init_extensions(app: Flask) -> None:
    """Initialize Flask extensions."""
    db.init_app(app)

    origins = app.config["ALLOWED_ORIGINS"]
    if origins and origins != ["*"]:
        CORS(app, origins=origins, supports_credentials=True)
    else:
        CORS(app, supports_credentials=True)

    csrf.init_app(app)

    login_manager.init_app(app)
    login_manager.login_view = "auth.login"
    login_manager.login_message = "Please log in to access this page."
    login_manager.login_message_category = "info"

    login_manager.user_loader(_load_user)


def _load_user(user_id):
    return get_service("auth_service").load_user(user_id)


def _init_services(app: Flask) -> None:
    """Create the grading services from the app configuration."""
    ocr = OCRService(language=app.config["OCR_LANGUAGE"])
    ai_client = AIClient(
        api_key=app.config["AI_API_KEY"],
        api_url=app.config["AI_API_URL"],
        file_api_url=app.config["AI_FILE_API_URL"],
        timeout=app.config["AI_REQUEST_TIMEOUT"],
    )

    app.extensions["fairgrade"] = {
        "ocr_service": ocr,
        "ai_client": ai_client,
        "grading_service": GradingService(
            ai_client=ai_client,
            ocr=ocr,
            use_ocr=app.config["GRADING_USE_OCR"],
            fallback_ratio=app.config["GRADING_FALLBACK_RATIO"],
        ),
        "auth_service": AuthService(),
        "results_store": GradingSessionStore(),
    }


def _register_blueprints(app: Flask) -> None:
    """Register application blueprints."""
    from webapp.routes.auth_routes import auth_bp
    from webapp.routes.grading_routes import grading_api_bp, grading_bp
    from webapp.routes.main_routes import main_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(grading_bp)
    app.register_blueprint(grading_api_bp)


def _setup_error_handlers(app: Flask) -> None:
    """Set up global error handlers."""
    from flask_wtf.csrf import CSRFError

    from src.exceptions import ApplicationError
    from webapp.error_handlers import (
        handle_400,
        handle_404,
        handle_413,
        handle_500,
        handle_application_error,
        handle_csrf_error,
    )

    app.register_error_handler(400, handle_400)
    app.register_error_handler(404, handle_404)
    app.register_error_handler(413, handle_413)
    app.register_error_handler(500, handle_500)
    app.register_error_handler(CSRFError, handle_csrf_error)
    app.register_error_handler(ApplicationError, handle_application_error)


def create_database_tables(app: Flask) -> None:
    """Create database tables if they don't exist."""
    with app.app_context():
        db.create_all()
        logger.info("Database tables created successfully")


def get_service(name: str):
    """Look up one of the services created for the current app."""
    from flask import current_app

    return current_app.extensions["fairgrade"][name]
