import pytest
import requests

from assistant.errors import ModelProviderFailure
from llm import client
from util.config import Settings


MESSAGES = [{"role": "system", "content": "be helpful"}, {"role": "user", "content": "trip to rome"}]


class Recorder:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, url, payload, headers=None, timeout=None):
        self.calls.append({"url": url, "payload": payload, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def test_sends_history_with_sampling_parameters(monkeypatch):
    rec = Recorder({"choices": [{"message": {"content": "  Rome is lovely.  "}}]})
    monkeypatch.setattr(client, "post_json", rec)
    settings = Settings(llm_api_key="secret", llm_model="test-model", llm_timeout=12)
    assert client.call_llm(MESSAGES, settings) == "Rome is lovely."
    call = rec.calls[0]
    assert call["url"] == "https://openrouter.ai/api/v1/chat/completions"
    assert call["payload"] == {"model": "test-model", "messages": MESSAGES, "temperature": 0.3, "max_tokens": 1000}
    assert call["headers"]["Authorization"] == "Bearer secret"
    assert call["timeout"] == 12


def test_http_error_raises_provider_failure(monkeypatch):
    response = requests.Response()
    response.status_code = 401
    monkeypatch.setattr(client, "post_json", Recorder(error=requests.HTTPError(response=response)))
    with pytest.raises(ModelProviderFailure) as info:
        client.call_llm(MESSAGES, Settings())
    assert info.value.status == 401


def test_network_error_raises_provider_failure(monkeypatch):
    monkeypatch.setattr(client, "post_json", Recorder(error=requests.ConnectionError("down")))
    with pytest.raises(ModelProviderFailure):
        client.call_llm(MESSAGES, Settings())


def test_empty_reply_raises_provider_failure(monkeypatch):
    monkeypatch.setattr(client, "post_json", Recorder({"choices": []}))
    with pytest.raises(ModelProviderFailure):
        client.call_llm(MESSAGES, Settings())


def test_ollama_provider(monkeypatch):
    rec = Recorder({"message": {"content": "ciao"}})
    monkeypatch.setattr(client, "post_json", rec)
    settings = Settings(llm_provider="ollama", ollama_base_url="http://localhost:11434/")
    assert client.call_llm(MESSAGES, settings) == "ciao"
    assert rec.calls[0]["url"] == "http://localhost:11434/api/chat"
    assert rec.calls[0]["payload"]["stream"] is False


def test_offline_mode_skips_network(monkeypatch):
    rec = Recorder()
    monkeypatch.setattr(client, "post_json", rec)
    assert client.call_llm(MESSAGES, Settings(llm_offline=True)) == "[offline] trip to rome"
    assert rec.calls == []


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "other/model")
    monkeypatch.setenv("LLM_MAX_TOKENS", "256")
    monkeypatch.setenv("LLM_OFFLINE", "yes")
    monkeypatch.setenv("MAX_SESSIONS", "not-a-number")
    settings = Settings.from_env()
    assert settings.llm_model == "other/model"
    assert settings.llm_max_tokens == 256
    assert settings.llm_offline is True
    assert settings.max_sessions == 1000


@pytest.mark.parametrize(
    "settings,payload",
    [
        (Settings(llm_provider="ollama"), [{"message": {"content": "hi"}}]),
        (Settings(llm_provider="ollama"), {"message": "hi"}),
        (Settings(), {"choices": [{"message": {"content": ["not", "text"]}}]}),
        (Settings(), ["unexpected"]),
        (Settings(), {"choices": [{"message": {"content": "   "}}]}),
    ],
)
def test_malformed_payload_raises_provider_failure(monkeypatch, settings, payload):
    monkeypatch.setattr(client, "post_json", Recorder(payload))
    with pytest.raises(ModelProviderFailure):
        client.call_llm(MESSAGES, settings)
