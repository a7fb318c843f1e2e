"""
Authentication Routes

Sign in, registration and sign out.
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_user, logout_user

from src.exceptions import ValidationError
from utils.logger import logger
from webapp.app_factory import get_service
from webapp.forms import LoginForm, RegisterForm

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _flash_form_errors(form) -> None:
    for field_name, errors in form.errors.items():
        label = getattr(form, field_name).label.text
        for error in errors:
            flash(f"{label}: {error}", "error")


def _safe_next_url() -> str:
    next_page = request.args.get("next")
    if next_page and next_page.startswith("/") and not next_page.startswith("//"):
        return next_page
    return url_for("main.dashboard")


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    """User login."""
    if current_user.is_authenticated:
        return redirect(url_for("main.dashboard"))

    form = LoginForm()
    if form.validate_on_submit():
        email = form.email.data.strip()
        user = get_service("auth_service").login(email, form.password.data)
        login_user(user, remember=form.remember_me.data)
        flash(f"Welcome back, {user.display_name}!", "success")
        return redirect(_safe_next_url())

    if request.method == "POST":
        _flash_form_errors(form)
    return render_template("auth/login.html", form=form)


@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    """User registration."""
    if current_user.is_authenticated:
        return redirect(url_for("main.dashboard"))

    form = RegisterForm()
    if form.validate_on_submit():
        try:
            user = get_service("auth_service").register(
                form.name.data.strip(), form.email.data.strip(), form.password.data
            )
        except ValidationError as e:
            logger.warning(f"Registration rejected: {e.message}")
            flash(e.user_message, "error")
            return render_template("auth/register.html", form=form)

        login_user(user)
        flash(f"Welcome, {user.display_name}!", "success")
        return redirect(url_for("main.dashboard"))

    if request.method == "POST":
        _flash_form_errors(form)
    return render_template("auth/register.html", form=form)


@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    """User logout."""
    get_service("auth_service").logout()
    logout_user()
    flash("You have been signed out", "info")
    return redirect(url_for("main.index"))
