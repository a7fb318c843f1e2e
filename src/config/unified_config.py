"""
Unified Configuration Management for the FairGrade application.

Configuration is read from the environment after loading ``instance/.env`` and
``.env``, and grouped into dataclass sections.
"""

import os
import secrets
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

from utils.logger import logger

DEFAULT_FILE_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.0-flash:generateContent"
)


def load_environment_variables():
    """Load environment variables from multiple .env files with priority."""
    instance_env = Path("instance/.env")
    if instance_env.exists():
        load_dotenv(instance_env, override=True)

    root_env = Path(".env")
    if root_env.exists():
        load_dotenv(root_env, override=False)  # Don't override instance settings


load_environment_variables()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class SecurityConfig:
    """Security-related configuration settings."""

    secret_key: str = field(default_factory=lambda: os.getenv("SECRET_KEY", ""))
    csrf_enabled: bool = True
    session_cookie_httponly: bool = True
    session_cookie_samesite: str = "Lax"
    allowed_origins: List[str] = field(
        default_factory=lambda: _env_list("ALLOWED_ORIGINS", "*")
    )

    def __post_init__(self):
        if not self.secret_key:
            logger.warning("SECRET_KEY not set - generating an ephemeral key")
            self.secret_key = secrets.token_hex(32)


@dataclass
class DatabaseConfig:
    """Database configuration settings."""

    database_url: str = field(
        default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///fairgrade.db")
    )
    database_echo: bool = False

    def __post_init__(self):
        if not self.database_url:
            raise ValueError("DATABASE_URL is required")


@dataclass
class FileConfig:
    """Upload limits and accepted formats."""

    max_content_length: int = 64 * 1024 * 1024
    max_student_files: int = 30
    student_extensions: List[str] = field(
        default_factory=lambda: ["jpg", "jpeg", "png"]
    )
    rubric_extensions: List[str] = field(
        default_factory=lambda: ["jpg", "jpeg", "png", "pdf", "docx", "txt"]
    )


@dataclass
class APIConfig:
    """External AI API configuration settings."""

    ai_api_key: str = field(default_factory=lambda: os.getenv("AI_API_KEY", ""))
    ai_api_url: str = field(default_factory=lambda: os.getenv("AI_API_URL", ""))
    ai_file_api_url: str = field(
        default_factory=lambda: os.getenv("AI_FILE_API_URL", DEFAULT_FILE_API_URL)
    )
    api_timeout: int = field(
        default_factory=lambda: int(os.getenv("AI_REQUEST_TIMEOUT", "60"))
    )


@dataclass
class GradingConfig:
    """Grading behaviour settings."""

    use_ocr: bool = field(default_factory=lambda: _env_bool("GRADING_USE_OCR"))
    ocr_language: str = field(default_factory=lambda: os.getenv("OCR_LANGUAGE", "eng"))
    fallback_ratio: float = 0.7


class UnifiedConfig:
    """Single entry point for application configuration."""

    def __init__(self):
        self.environment = os.getenv("FLASK_ENV", "development")
        self.security = SecurityConfig()
        self.database = DatabaseConfig()
        self.files = FileConfig()
        self.api = APIConfig()
        self.grading = GradingConfig()

        logger.info(f"Configuration loaded for environment: {self.environment}")

    def get_flask_config(self) -> Dict[str, Any]:
        """Get Flask-specific configuration dictionary."""
        return {
            "SECRET_KEY": self.security.secret_key,
            "WTF_CSRF_ENABLED": self.security.csrf_enabled,
            "SESSION_COOKIE_HTTPONLY": self.security.session_cookie_httponly,
            "SESSION_COOKIE_SAMESITE": self.security.session_cookie_samesite,
            "ALLOWED_ORIGINS": self.security.allowed_origins,
            "SQLALCHEMY_DATABASE_URI": self.database.database_url,
            "SQLALCHEMY_ECHO": self.database.database_echo,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "MAX_CONTENT_LENGTH": self.files.max_content_length,
            "MAX_STUDENT_FILES": self.files.max_student_files,
            "STUDENT_FILE_EXTENSIONS": self.files.student_extensions,
            "RUBRIC_FILE_EXTENSIONS": self.files.rubric_extensions,
            "AI_API_KEY": self.api.ai_api_key,
            "AI_API_URL": self.api.ai_api_url,
            "AI_FILE_API_URL": self.api.ai_file_api_url,
            "AI_REQUEST_TIMEOUT": self.api.api_timeout,
            "GRADING_USE_OCR": self.grading.use_ocr,
            "OCR_LANGUAGE": self.grading.ocr_language,
            "GRADING_FALLBACK_RATIO": self.grading.fallback_ratio,
        }


config = UnifiedConfig()
