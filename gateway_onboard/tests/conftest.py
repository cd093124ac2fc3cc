import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1].parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gateway_onboard.errors import RequestFailed
from gateway_onboard.types import OptionEntry


class FakeGateway:
    """In-memory stand-in for the gateway admin API; records every call."""

    def __init__(self, options=None, create_error=None, fail_updates=()):
        self.options = dict(options or {})
        self.create_error = create_error
        self.fail_updates = set(fail_updates)
        self.calls = []
        self.channels = []

    async def create_channel(self, payload):
        self.calls.append(("create_channel", payload["name"]))
        if self.create_error is not None:
            raise self.create_error
        self.channels.append(payload)

    async def fetch_options(self):
        self.calls.append(("fetch_options",))
        return [OptionEntry(key=k, value=v) for k, v in self.options.items()]

    async def update_option(self, key, value):
        self.calls.append(("update_option", key))
        if key in self.fail_updates:
            raise RequestFailed(f"update option {key}", 500, "boom")
        self.options[key] = value

    def call_names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def make_gateway():
    return FakeGateway
