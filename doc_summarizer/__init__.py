"""
Document Summarizer Application Factory
"""
import logging
import sys
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

from doc_summarizer.config import get_config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()


def configure_logging(level="INFO") -> None:
    """
    Configure application-wide logging.
    - Timestamps, module name, level
    - One stdout handler, replacing anything installed before
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)

    # quiet noisy libs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("PyPDF2").setLevel(logging.ERROR)


def create_app(config_name="default"):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # pytest installs its own capture handlers
    if not app.config.get("TESTING"):
        configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    login_manager.login_view = "auth.login"

    # Register blueprints
    from doc_summarizer.auth import auth_bp
    from doc_summarizer.api import api_bp
    from doc_summarizer.cli import register_commands

    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)

    # Upload endpoint is called from fetch() without a CSRF token
    csrf.exempt(api_bp)

    register_commands(app)

    @app.errorhandler(413)
    def too_large(e):
        limit_mb = (app.config.get("MAX_CONTENT_LENGTH") or 0) // (1024 * 1024)
        return jsonify({"ok": False, "error": f"File too large (limit {limit_mb}MB)"}), 413

    @app.errorhandler(500)
    def server_error(e):
        app.logger.exception("Unhandled error on %s", request.path)
        return jsonify({"ok": False, "error": "Internal server error"}), 500

    @app.route("/healthz")
    def healthz():
        """Health check for load balancers and monitoring"""
        try:
            from sqlalchemy import text
            db.session.execute(text("SELECT 1"))
            db_status = "ok"
        except Exception as e:
            db_status = f"error: {e}"

        return jsonify({
            "status": "ok" if db_status == "ok" else "degraded",
            "version": app.config["APP_VERSION"],
            "database": db_status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    @app.route("/version")
    def version():
        """Version and build info"""
        from doc_summarizer.services.extraction import ALLOWED_EXTENSIONS

        return jsonify({
            "version": app.config["APP_VERSION"],
            "build_time": app.config["BUILD_TIME"],
            "git_commit": app.config["GIT_COMMIT"],
            "supported_extensions": list(ALLOWED_EXTENSIONS),
        })

    with app.app_context():
        from sqlalchemy import inspect
        from doc_summarizer import models  # noqa: F401  registers tables

        # Only create tables if they don't exist (safe for existing DB)
        inspector = inspect(db.engine)
        if not inspector.get_table_names():
            app.logger.info("No tables found, creating...")
            db.create_all()

    return app
