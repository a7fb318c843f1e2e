"""
Test configuration and fixtures for the FairGrade test suite.
"""

import io
from unittest.mock import Mock

import pytest
from flask import g

from src.database.models import db
from src.services.grading_service import GradingService
from src.services.llm_service import AIClient
from webapp.app_factory import create_app


@pytest.fixture
def app():
    """Create test application."""
    app = create_app(
        "testing",
        overrides={
            "SECRET_KEY": "test-secret-key",
            "AI_API_KEY": "",
            "GRADING_USE_OCR": False,
        },
    )

    # The app context below outlives single requests and Flask reuses it for
    # them, so Flask-Login's per-request user cache in ``g`` would otherwise
    # leak between test clients.
    @app.teardown_request
    def _forget_login_user(exc):
        g.pop("_login_user", None)

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def mock_ai_client():
    """AI client that answers every grading prompt with a fixed score."""
    ai_client = Mock(spec=AIClient)
    ai_client.call_ai_api.return_value = "SCORE: 20\nSTRENGTHS: Clear answer"
    ai_client.call_ai_api_with_file.return_value = "SCORE: 20\nSTRENGTHS: Clear answer"
    return ai_client


@pytest.fixture
def grading_app(app, mock_ai_client):
    """Application whose grading service talks to the mocked AI client."""
    app.extensions["fairgrade"]["grading_service"] = GradingService(
        ai_client=mock_ai_client, ocr=Mock(), use_ocr=False
    )
    return app


def register_user(client, name="Ada Lovelace", email="ada@school.edu", password="secret123"):
    """Register (and thereby sign in) a user via the test client."""
    return client.post(
        "/auth/register",
        data={
            "name": name,
            "email": email,
            "password": password,
            "confirm_password": password,
        },
    )


@pytest.fixture
def auth_client(client):
    """Test client with a signed-in user."""
    register_user(client)
    return client


def image_upload(filename, content=b"\xff\xd8\xff\xe0\x00\x10JFIF"):
    """A (stream, filename) pair usable in multipart test requests."""
    return (io.BytesIO(content), filename)
