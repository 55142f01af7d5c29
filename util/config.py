"""
util/config.py

Runtime configuration read from the environment.

Environment variables:
- LLM_PROVIDER          (openrouter | ollama) default openrouter
- LLM_API_URL           (default: https://openrouter.ai/api)
- LLM_API_KEY           bearer credential for the hosted model
- LLM_MODEL             (default: mistralai/mistral-7b-instruct)
- LLM_TEMPERATURE       (default: 0.3)
- LLM_MAX_TOKENS        (default: 1000)
- LLM_TIMEOUT           seconds (default: 30)
- LLM_OFFLINE           (1/true to stub replies without calling the API)
- OLLAMA_BASE_URL       (default: http://localhost:11434)
- OLLAMA_MODEL          (default: qwen2.5:3b)
- WEATHER_API_KEY, AMADEUS_API_KEY, GOOGLE_PLACES_API_KEY,
  EXCHANGE_API_KEY, AVIATION_STACK_API_KEY: travel provider credentials
- SESSION_TTL_SECONDS   idle time before a session is evicted (default 21600)
- MAX_SESSIONS          (default 1000)

Missing credentials are not checked here; the provider call fails instead.
"""

import os
from dataclasses import dataclass


def _flag(name):
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes"}


def _number(name, default, cast=float):
    try:
        return cast(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    llm_provider: str = "openrouter"
    llm_api_url: str = "https://openrouter.ai/api"
    llm_api_key: str = ""
    llm_model: str = "mistralai/mistral-7b-instruct"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 1000
    llm_timeout: float = 30.0
    llm_offline: bool = False
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "qwen2.5:3b"
    weather_api_key: str = ""
    amadeus_api_key: str = ""
    google_places_api_key: str = ""
    exchange_api_key: str = ""
    aviation_stack_api_key: str = ""
    session_ttl_seconds: float = 6 * 60 * 60
    max_sessions: int = 1000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "openrouter").strip().lower(),
            llm_api_url=os.getenv("LLM_API_URL", "https://openrouter.ai/api"),
            llm_api_key=os.getenv("LLM_API_KEY", ""),
            llm_model=os.getenv("LLM_MODEL", "mistralai/mistral-7b-instruct"),
            llm_temperature=_number("LLM_TEMPERATURE", 0.3),
            llm_max_tokens=_number("LLM_MAX_TOKENS", 1000, int),
            llm_timeout=_number("LLM_TIMEOUT", 30.0),
            llm_offline=_flag("LLM_OFFLINE"),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL", "http://localhost:11434"),
            ollama_model=os.getenv("OLLAMA_MODEL", "qwen2.5:3b"),
            weather_api_key=os.getenv("WEATHER_API_KEY", ""),
            amadeus_api_key=os.getenv("AMADEUS_API_KEY", ""),
            google_places_api_key=os.getenv("GOOGLE_PLACES_API_KEY", ""),
            exchange_api_key=os.getenv("EXCHANGE_API_KEY", ""),
            aviation_stack_api_key=os.getenv("AVIATION_STACK_API_KEY", ""),
            session_ttl_seconds=_number("SESSION_TTL_SECONDS", 6 * 60 * 60),
            max_sessions=_number("MAX_SESSIONS", 1000, int),
        )
