"""Tests for environment-driven configuration."""

import os
from unittest.mock import patch

from src.config.unified_config import DEFAULT_FILE_API_URL, UnifiedConfig
from webapp.app_factory import create_app


def test_defaults():
    with patch.dict(os.environ, {}, clear=True):
        config = UnifiedConfig()

    assert len(config.security.secret_key) == 64
    assert config.database.database_url == "sqlite:///fairgrade.db"
    assert config.api.ai_file_api_url == DEFAULT_FILE_API_URL
    assert config.api.api_timeout == 60
    assert config.grading.use_ocr is False
    assert config.files.max_student_files == 30
    assert config.security.allowed_origins == ["*"]


def test_environment_overrides():
    env = {
        "SECRET_KEY": "s3cret",
        "AI_API_KEY": "key",
        "AI_API_URL": "https://ai.test/text",
        "AI_REQUEST_TIMEOUT": "15",
        "GRADING_USE_OCR": "true",
        "OCR_LANGUAGE": "deu",
        "ALLOWED_ORIGINS": "https://school.edu, https://grades.school.edu",
    }
    with patch.dict(os.environ, env, clear=True):
        flask_config = UnifiedConfig().get_flask_config()

    assert flask_config["SECRET_KEY"] == "s3cret"
    assert flask_config["AI_API_KEY"] == "key"
    assert flask_config["AI_API_URL"] == "https://ai.test/text"
    assert flask_config["AI_REQUEST_TIMEOUT"] == 15
    assert flask_config["GRADING_USE_OCR"] is True
    assert flask_config["OCR_LANGUAGE"] == "deu"
    assert flask_config["GRADING_FALLBACK_RATIO"] == 0.7
    assert flask_config["ALLOWED_ORIGINS"] == [
        "https://school.edu",
        "https://grades.school.edu",
    ]


def test_cors_uses_configured_origins():
    app = create_app(
        "testing",
        overrides={"SECRET_KEY": "test", "ALLOWED_ORIGINS": ["https://school.edu"]},
    )
    client = app.test_client()

    allowed = client.get("/auth/login", headers={"Origin": "https://school.edu"})
    other = client.get("/auth/login", headers={"Origin": "https://evil.example.com"})

    assert allowed.headers["Access-Control-Allow-Origin"] == "https://school.edu"
    assert "Access-Control-Allow-Origin" not in other.headers
