"""
Main tool blueprint: the session-gated index page and the upload endpoint.
"""
from flask import Blueprint, current_app, jsonify, render_template, request
from flask_login import login_required

from doc_summarizer.auth import get_current_user
from doc_summarizer.services.extraction import accept_attribute
from doc_summarizer.services.summarize import InFlightUploads, summarize_upload

api_bp = Blueprint("api", __name__)

IN_FLIGHT = InFlightUploads()

BUSY_MESSAGE = "A document is already being processed."


@api_bp.route("/", methods=["GET"])
def index():
    user = get_current_user()
    if user is None:
        return render_template("auth/login.html")
    return render_template("index.html", user=user, accept=accept_attribute())


@api_bp.route("/summarize", methods=["POST"])
@login_required
def summarize():
    file = request.files.get("file")
    if not file or not file.filename:
        return jsonify({"ok": False, "error": "No file uploaded"}), 400

    user = get_current_user()
    if not IN_FLIGHT.acquire(user.id):
        current_app.logger.info("upload from user %s ignored: previous one still running", user.id)
        return jsonify({"ok": False, "error": BUSY_MESSAGE}), 409

    try:
        filename = file.filename
        data = file.read()
        current_app.logger.info("summarizing %r (%d bytes) for user %s", filename, len(data), user.id)
        outcome = summarize_upload(filename, data)
    finally:
        IN_FLIGHT.release(user.id)

    if outcome.ok:
        return jsonify({"ok": True, "file_name": outcome.file_name, "summary": outcome.summary}), 200

    status = 400 if outcome.unsupported else 502
    return jsonify({
        "ok": False,
        "file_name": outcome.file_name,
        "summary": "",
        "error": outcome.error,
    }), status
