"""
Authentication routes and the session gate helpers.

The rest of the app only ever asks three things of the identity layer:
who is signed in, tell me when that changes, and sign the user out.
"""
import logging
from datetime import datetime, timezone
from urllib.parse import urlsplit

from flask import Blueprint, flash, jsonify, redirect, render_template, request, url_for
from flask_login import (
    current_user,
    login_user,
    logout_user,
    user_logged_in,
    user_logged_out,
)

from doc_summarizer import db, login_manager
from doc_summarizer.models import User

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

MIN_PASSWORD_LENGTH = 8


@login_manager.user_loader
def load_user(user_id):
    """Load user by ID"""
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


def wants_json() -> bool:
    if request.is_json:
        return True
    accept = request.accept_mimetypes
    return accept["application/json"] > accept["text/html"]


@login_manager.unauthorized_handler
def unauthorized():
    if wants_json():
        return jsonify({"ok": False, "error": "Authentication required."}), 401
    return redirect(url_for("auth.login", next=request.path))


# ============ Identity interface ============

def get_current_user():
    """Return the signed-in user, or None when nobody is signed in."""
    if current_user and getattr(current_user, "is_authenticated", False):
        return current_user._get_current_object()
    return None


def on_auth_state_change(callback):
    """
    Subscribe ``callback(event, user)`` to sign-in and sign-out transitions.

    ``event`` is ``SIGNED_IN`` or ``SIGNED_OUT``. Returns a function that
    removes the subscription.
    """
    def _signed_in(sender, user=None, **extra):
        callback(SIGNED_IN, user)

    def _signed_out(sender, user=None, **extra):
        callback(SIGNED_OUT, user)

    user_logged_in.connect(_signed_in, weak=False)
    user_logged_out.connect(_signed_out, weak=False)

    def unsubscribe():
        user_logged_in.disconnect(_signed_in)
        user_logged_out.disconnect(_signed_out)

    return unsubscribe


def sign_out():
    """End the current session. Safe to call when nobody is signed in."""
    if get_current_user() is None:
        return False
    logout_user()
    return True


def _log_auth_event(event, user):
    logger.info("auth state %s user=%s", event, getattr(user, "email", None))


on_auth_state_change(_log_auth_event)


def _safe_next(target):
    if not target:
        return None
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith("/"):
        return None
    return target


# ============ Routes ============

@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    """Sign in"""
    if get_current_user() is not None:
        return redirect(url_for("api.index"))

    if request.method == "POST":
        email = request.form.get("email", "").strip().lower()
        password = request.form.get("password", "")
        remember = request.form.get("remember", "") in ("1", "true", "on", "yes")

        user = User.query.filter_by(email=email).first() if email else None

        if user and user.check_password(password):
            if not user.is_active:
                flash("Account is disabled.", "error")
                return render_template("auth/login.html"), 403

            login_user(user, remember=remember)
            user.last_login_at = datetime.now(timezone.utc)
            db.session.commit()

            return redirect(_safe_next(request.args.get("next")) or url_for("api.index"))

        flash("Invalid email or password.", "error")
        return render_template("auth/login.html"), 401

    return render_template("auth/login.html")


@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    """Create an account and sign in"""
    if get_current_user() is not None:
        return redirect(url_for("api.index"))

    if request.method == "POST":
        email = request.form.get("email", "").strip().lower()
        password = request.form.get("password", "")
        password_confirm = request.form.get("password_confirm", "")

        error = None
        if not email or not password:
            error = "Email and password are required."
        elif "@" not in email:
            error = "Enter a valid email address."
        elif len(password) < MIN_PASSWORD_LENGTH:
            error = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        elif password != password_confirm:
            error = "Passwords do not match."
        elif User.query.filter_by(email=email).first():
            error = "Email already registered."

        if error:
            flash(error, "error")
            return render_template("auth/register.html"), 400

        user = User(email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        logger.info("registered user %s", email)

        login_user(user)
        return redirect(url_for("api.index"))

    return render_template("auth/register.html")


@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    """Sign out and go back to the sign-in screen"""
    if sign_out():
        flash("You have been signed out.", "info")
    return redirect(url_for("api.index"))


@auth_bp.route("/auth/status")
def auth_status():
    user = get_current_user()
    if user is None:
        return jsonify({"authenticated": False, "email": None})
    return jsonify({"authenticated": True, "email": user.email})
