"""
Completion client tests (OpenAI SDK replaced by a fake)
"""
from types import SimpleNamespace

import pytest

from doc_summarizer.errors import CompletionError
from doc_summarizer.services import completion
from doc_summarizer.services.completion import request_completion


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content=None, error=None):
    completions = FakeCompletions(content, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


class TestRequestCompletion:

    def test_text_returned_unchanged(self):
        client, calls = fake_client("  Summary text\n")

        assert request_completion("Summarize", client=client) == "  Summary text\n"
        assert calls.kwargs["messages"] == [{"role": "user", "content": "Summarize"}]
        assert "response_format" not in calls.kwargs

    def test_none_content_is_empty_string(self):
        client, _ = fake_client(None)
        assert request_completion("x", client=client) == ""

    def test_transport_error_wrapped(self):
        client, _ = fake_client(error=TimeoutError("read timed out"))
        with pytest.raises(CompletionError) as exc:
            request_completion("x", client=client)
        assert "TimeoutError" in str(exc.value)

    def test_bad_response_type(self):
        client, _ = fake_client("x")
        with pytest.raises(ValueError):
            request_completion("x", response_type="json", client=client)

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        ok, msg = completion.client_ready()
        if completion.OpenAI is not None:
            assert ok is False
            assert "OPENAI_API_KEY" in msg
        with pytest.raises(CompletionError):
            request_completion("x")

    def test_model_from_app_config(self, app):
        app.config["OPENAI_MODEL"] = "gpt-test"
        with app.app_context():
            assert completion.model_name() == "gpt-test"
