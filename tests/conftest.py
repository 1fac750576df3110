import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Ensure the package at the repository root is importable without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kraken_client import KrakenClient  # noqa: E402
from kraken_client.transport import AsyncTransport, Transport  # noqa: E402

# Example credentials from the exchange's REST authentication guide
API_KEY = "test-api-key"
API_SECRET = "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="


class RecordingTransport(Transport):
    """Returns canned bodies and records every request it receives."""

    def __init__(self, responses: Optional[List] = None):
        self.responses = list(responses or ['{"error":[],"result":{}}'])
        self.requests: List[Dict] = []
        self.closed = False

    def post(self, url, headers, body, timeout):
        self.requests.append({"url": url, "headers": headers, "body": body, "timeout": timeout})
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


class AsyncRecordingTransport(AsyncTransport):
    def __init__(self, responses: Optional[List] = None):
        self._sync = RecordingTransport(responses)
        self.closed = False

    @property
    def requests(self):
        return self._sync.requests

    async def post(self, url, headers, body, timeout):
        return self._sync.post(url, headers, body, timeout)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def client(transport):
    return KrakenClient(API_KEY, API_SECRET, transport=transport)
