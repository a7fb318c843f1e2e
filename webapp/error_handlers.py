"""
Error Handlers

Centralized error handling for the Flask application. API requests receive
JSON, browser requests the error page.
"""

from flask import jsonify, render_template, request

from src.models.api_responses import APIResponse, ErrorCode, ErrorDetail
from utils.logger import logger


def _wants_json() -> bool:
    return request.is_json or request.path.startswith("/api/")


def _error_response(
    status_code: int, title: str, description: str, error_code: ErrorCode
):
    if _wants_json():
        body = APIResponse.error(
            description, errors=[ErrorDetail(code=error_code, message=title)]
        )
        return jsonify(body.to_dict()), status_code

    context = {
        "error_code": status_code,
        "error_message": title,
        "error_description": description,
    }
    return render_template("error.html", **context), status_code


def handle_400(error):
    """Handle 400 Bad Request errors."""
    logger.warning(f"400 error: {error} - URL: {request.url}")
    return _error_response(
        400,
        "Bad Request",
        "The request could not be understood by the server",
        ErrorCode.VALIDATION_ERROR,
    )


def handle_404(error):
    """Handle 404 Not Found errors."""
    logger.info(f"404 error: {error} - URL: {request.url}")
    return _error_response(
        404,
        "Page Not Found",
        "The page you are looking for does not exist",
        ErrorCode.NOT_FOUND,
    )


def handle_413(error):
    """Handle 413 Request Entity Too Large errors."""
    logger.warning(f"413 error: {error} - URL: {request.url}")
    return _error_response(
        413,
        "File Too Large",
        "The uploaded files exceed the maximum allowed size",
        ErrorCode.VALIDATION_ERROR,
    )


def handle_500(error):
    """Handle 500 Internal Server Error."""
    logger.error(f"500 error: {error} - URL: {request.url}")
    return _error_response(
        500,
        "Internal Server Error",
        "An unexpected error occurred. Please try again later",
        ErrorCode.INTERNAL_ERROR,
    )


def handle_csrf_error(error):
    """Handle CSRF token errors."""
    logger.warning(f"CSRF error: {error} - URL: {request.url}")
    return _error_response(
        400,
        "Security Error",
        "Security token validation failed. Please refresh the page and try again",
        ErrorCode.VALIDATION_ERROR,
    )


def handle_application_error(error):
    """Handle ApplicationError raised outside a route's own handling."""
    logger.error(f"Application error: {error} - URL: {request.url}")
    return _error_response(
        error.status_code,
        error.error_code.value.replace("_", " ").title(),
        error.user_message,
        error.error_code,
    )
