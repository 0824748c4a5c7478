import json
from typing import Dict, List, Optional

import pytest

from splunk_query.config import Credentials, SplunkConfig
from splunk_query.transport import TransportResponse


class FakeTransport:
    """Replays canned responses keyed by method and URL prefix."""

    def __init__(self) -> None:
        self.routes: Dict[tuple, List[TransportResponse]] = {}
        self.calls: List[dict] = []

    def add(self, method: str, url: str, payload=None, status: int = 200, reason: str = "OK", raw: Optional[bytes] = None) -> None:
        if raw is None:
            raw = b"" if payload is None else json.dumps(payload).encode()
        self.routes.setdefault((method, url), []).append(TransportResponse(status_code=status, reason=reason, body=raw))

    def send(self, method, url, headers=None, body=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "body": body})
        base = url.split("?")[0]
        queue = self.routes.get((method, base))
        if not queue:
            raise AssertionError(f"unexpected request {method} {url}")
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def requests_to(self, url: str) -> List[dict]:
        return [call for call in self.calls if call["url"].split("?")[0] == url]


@pytest.fixture
def config():
    return SplunkConfig(hostname="h")


@pytest.fixture
def credentials():
    return Credentials(username="admin", password="changeme")


@pytest.fixture
def transport():
    return FakeTransport()
