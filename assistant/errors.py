"""
assistant/errors.py

Failure types raised across the assistant.

- ProviderLookupFailure: a travel-data provider call failed or found nothing.
- EnrichmentFailure: every enrichment call for a turn failed.
- ModelProviderFailure: the language-model call failed; fatal to the turn.
- MalformedInput: the inbound request was missing or invalid.
"""


class TravelAssistantError(Exception):
    """Base class for assistant errors."""


class ProviderLookupFailure(TravelAssistantError):
    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class EnrichmentFailure(TravelAssistantError):
    def __init__(self, failures: dict[str, Exception]):
        names = ", ".join(sorted(failures)) or "none"
        super().__init__(f"all enrichment lookups failed ({names})")
        self.failures = failures


class ModelProviderFailure(TravelAssistantError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


ProviderError = ModelProviderFailure


class MalformedInput(TravelAssistantError):
    pass
