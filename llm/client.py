"""
llm/client.py

Chat-completion client for the hosted language model.
- Single entrypoint: call_llm(messages, settings=None)
- `messages` is the full ordered history: [{'role': 'system'|'user'|'assistant', 'content': str}, ...]
- Default provider is any OpenAI-compatible endpoint (OpenRouter by default); 'ollama' talks to a local daemon
- Failures raise ModelProviderFailure; nothing is retried

Configuration comes from util.config.Settings (see that module for the environment variables).
"""

import logging

import requests

from assistant.errors import ModelProviderFailure
from util.config import Settings
from util.http import post_json


logger = logging.getLogger(__name__)


def _offline_reply(messages):
    last_user = next((m["content"] for m in reversed(messages) if m.get("role") == "user"), "")
    preview = (last_user or "").strip().splitlines()[0][:120] if last_user.strip() else ""
    return f"[offline] {preview}" if preview else "[offline] OK"


def _post(url, payload, headers, timeout, provider):
    try:
        return post_json(url, payload, headers=headers, timeout=timeout)
    except requests.HTTPError as http_err:
        status = getattr(http_err.response, "status_code", None)
        logger.error("%s returned HTTP %s", provider, status)
        raise ModelProviderFailure(f"{provider} error (HTTP {status})", status=status) from http_err
    except requests.RequestException as exc:
        logger.error("%s request failed: %s", provider, exc)
        raise ModelProviderFailure(f"Unable to reach {provider}: {exc}") from exc
    except ValueError as exc:
        raise ModelProviderFailure(f"{provider} returned a non-JSON response") from exc


def call_llm(messages, settings: Settings | None = None):
    """
    Send the conversation to the configured model and return its reply.

    Args:
        messages: Ordered chat history including system messages.
        settings: Model configuration; read from the environment when omitted.

    Returns:
        Model response text (str), trimmed.

    Raises:
        ModelProviderFailure: network error, non-success status or a reply without content.
    """
    settings = settings or Settings.from_env()

    if settings.llm_offline:
        return _offline_reply(messages)

    if settings.llm_provider == "ollama":
        base = settings.ollama_base_url.rstrip("/")
        data = _post(
            f"{base}/api/chat",
            {
                "model": settings.ollama_model,
                "messages": messages,
                "stream": False,
                "options": {"temperature": settings.llm_temperature, "num_predict": settings.llm_max_tokens},
            },
            {"Content-Type": "application/json", "Accept": "application/json"},
            settings.llm_timeout,
            "Ollama",
        )
        try:
            content = data["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
    else:
        endpoint = f"{settings.llm_api_url.rstrip('/')}/v1/chat/completions"
        headers = {
            "Authorization": f"Bearer {settings.llm_api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-Title": "AI Travel Planner",
        }
        data = _post(
            endpoint,
            {
                "model": settings.llm_model,
                "messages": messages,
                "temperature": settings.llm_temperature,
                "max_tokens": settings.llm_max_tokens,
            },
            headers,
            settings.llm_timeout,
            "Model provider",
        )
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

    if not isinstance(content, str) or not content.strip():
        raise ModelProviderFailure("Model returned an empty or malformed reply")
    return content.strip()
