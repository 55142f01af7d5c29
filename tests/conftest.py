"""
Shared pytest configuration and fakes.

Puts the project root on sys.path so `import assistant` works without an
install, and provides a fake travel gateway and model.
"""

import sys
from pathlib import Path

import pytest


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from assistant.errors import ModelProviderFailure, ProviderLookupFailure  # noqa: E402
from assistant.session import SessionStore  # noqa: E402


class FakeGateway:
    """Records calls; returns canned data unless the capability is listed in `failing`."""

    def __init__(self, failing=()):
        self.calls = []
        self.failing = set(failing)

    def _call(self, name, *args):
        self.calls.append((name, args))
        if name in self.failing:
            raise ProviderLookupFailure("fake", f"{name} unavailable")
        return {"capability": name, "args": list(args)}

    def detailed_weather(self, city):
        return self._call("detailed_weather", city)

    def historical_weather(self, city, start, end):
        return self._call("historical_weather", city, start, end)

    def flights(self, origin, destination, date):
        return self._call("flights", origin, destination, date)

    def hotels(self, city, check_in, check_out):
        return self._call("hotels", city, check_in, check_out)

    def places(self, city):
        return self._call("places", city)

    def called(self):
        return {name for name, _ in self.calls}


class FakeModel:
    def __init__(self, reply="Sounds like a great trip!", fail=False):
        self.reply = reply
        self.fail = fail
        self.requests = []

    def __call__(self, messages):
        self.requests.append([dict(m) for m in messages])
        if self.fail:
            raise ModelProviderFailure("Model provider error (HTTP 503)", status=503)
        return self.reply


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def model():
    return FakeModel()


@pytest.fixture
def store():
    return SessionStore()
