"""OpenAI wrapper for the remote completion endpoint.

One operation: submit ``{prompt, response_type}`` and get back the model's
text unchanged. Failures raise CompletionError; there is no retry here.
"""
from __future__ import annotations

import logging
import os
from typing import Tuple

from flask import current_app, has_app_context

from doc_summarizer.errors import CompletionError

try:
    from openai import OpenAI
except Exception:
    OpenAI = None

logger = logging.getLogger(__name__)

RESPONSE_TYPES = ("text",)


def _setting(name: str, default: str = "") -> str:
    # Inside the app the config object is authoritative; it already read the environment
    if has_app_context() and name in current_app.config:
        value = current_app.config.get(name)
        return str(value).strip() if value not in (None, "") else default
    return os.getenv(name, "").strip() or default


def client_ready() -> Tuple[bool, str]:
    if OpenAI is None:
        return False, "OpenAI SDK not installed"
    if not _setting("OPENAI_API_KEY").strip():
        return False, "OPENAI_API_KEY is missing"
    return True, ""


def model_name() -> str:
    return _setting("OPENAI_MODEL", "gpt-4.1")


def get_client():
    ok, _ = client_ready()
    if not ok:
        return None
    timeout = float(_setting("OPENAI_TIMEOUT", "60"))
    return OpenAI(api_key=_setting("OPENAI_API_KEY").strip(), timeout=timeout)


def request_completion(prompt: str, response_type: str = "text", client=None) -> str:
    """Send one prompt to the completion endpoint and return the message content unchanged."""
    if response_type not in RESPONSE_TYPES:
        raise ValueError(f"response_type must be one of {RESPONSE_TYPES}, got {response_type!r}")

    client = client or get_client()
    if client is None:
        _, msg = client_ready()
        raise CompletionError(msg or "Client not available")

    try:
        res = client.chat.completions.create(
            model=model_name(),
            messages=[{"role": "user", "content": prompt}],
        )
        content = res.choices[0].message.content or ""
    except Exception as e:
        raise CompletionError(f"LLM request failed: {type(e).__name__}: {e}") from e

    logger.debug("completion returned %d chars", len(content))
    return content
