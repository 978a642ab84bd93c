import pytest

from backend.llm.gemini_client import CompletionServiceError, GeminiClient
from backend.models.message import Turn


class _FakeModels:
    def __init__(self, text=None, exc=None):
        self.text = text
        self.exc = exc
        self.kwargs = None

    def generate_content(self, **kwargs):
        self.kwargs = kwargs
        if self.exc is not None:
            raise self.exc
        return type("Resp", (), {"text": self.text})()


class _FakeGenai:
    def __init__(self, models):
        self.models = models


def _client(models):
    client = GeminiClient(api_key="test-key", model="gemini-test", timeout_seconds=5)
    client.client = _FakeGenai(models)
    return client


MESSAGES = [
    Turn(role="system", content="be helpful"),
    Turn(role="user", content="hi"),
    Turn(role="assistant", content='{"reply": "hello"}'),
    Turn(role="user", content="posts from Galle?"),
]


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(CompletionServiceError):
        GeminiClient()


def test_roles_are_mapped_for_gemini():
    models = _FakeModels(text='  {"reply": "ok"}  ')
    text = _client(models).complete(MESSAGES)

    assert text == '{"reply": "ok"}'
    assert models.kwargs["model"] == "gemini-test"
    assert [c["role"] for c in models.kwargs["contents"]] == ["user", "model", "user"]
    assert models.kwargs["config"]["system_instruction"] == "be helpful"
    assert models.kwargs["config"]["max_output_tokens"] == 400


def test_api_failure_is_wrapped():
    models = _FakeModels(exc=TimeoutError("deadline exceeded"))
    with pytest.raises(CompletionServiceError) as info:
        _client(models).complete(MESSAGES)
    assert isinstance(info.value.__cause__, TimeoutError)


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_response_is_an_error(text):
    with pytest.raises(CompletionServiceError):
        _client(_FakeModels(text=text)).complete(MESSAGES)


def test_system_only_messages_rejected():
    with pytest.raises(ValueError):
        _client(_FakeModels(text="x")).complete([Turn(role="system", content="only")])
