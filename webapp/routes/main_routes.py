"""
Main Application Routes

Landing page, dashboard and service health.
"""

from flask import Blueprint, jsonify, redirect, render_template, url_for
from flask_login import current_user, login_required

from src.models.api_responses import APIResponse
from utils.logger import logger
from webapp.app_factory import get_service

main_bp = Blueprint("main", __name__)


def get_service_status():
    """Report whether the OCR engine and the AI API are usable."""
    ocr_service = get_service("ocr_service")
    ai_client = get_service("ai_client")
    return {
        "ocr_status": ocr_service.health_check(),
        "ai_status": ai_client.health_check(),
        "ocr_metrics": ocr_service.metrics.to_dict(),
        "ai_metrics": ai_client.metrics.to_dict(),
        "operations": logger.get_counters(),
    }


@main_bp.route("/")
def index():
    """Landing page."""
    if current_user.is_authenticated:
        return redirect(url_for("main.dashboard"))
    return render_template("landing.html")


@main_bp.route("/dashboard")
@login_required
def dashboard():
    """User dashboard listing the user's grading sessions."""
    sessions = get_service("results_store").list_for_user(current_user.id)
    graded_students = sum(len(s.results) for s in sessions)
    return render_template(
        "dashboard.html",
        sessions=sessions,
        stats={
            "total_sessions": len(sessions),
            "graded_students": graded_students,
        },
    )


@main_bp.route("/health")
def health():
    """Service health as JSON."""
    return jsonify(APIResponse.success(get_service_status()).to_dict())
