import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pytest
import requests

from library_transfer.config import SPOTIFY_API_BASE
from library_transfer.spotify import with_page_size

API = SPOTIFY_API_BASE

_NO_JSON = object()


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = _NO_JSON,
        text: Optional[str] = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self._json = json_data
        if text is None:
            text = "" if json_data is _NO_JSON else json.dumps(json_data)
        self.text = text
        self.url = url

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._json is _NO_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json


@dataclass
class Call:
    method: str
    url: str
    headers: Dict[str, str]
    json: Any = None
    data: Any = None
    auth: Any = None

    @property
    def token(self) -> Optional[str]:
        value = (self.headers or {}).get("Authorization", "")
        return value[len("Bearer ") :] if value.startswith("Bearer ") else None


class FakeSpotify:
    """
    Routing table of canned responses keyed by (METHOD, exact URL).

    Each route holds a queue; the last response repeats once the queue is
    exhausted. An exception instance in the queue is raised instead of
    being returned.
    """

    def __init__(self) -> None:
        self.routes: Dict[tuple, List[Any]] = {}
        self.calls: List[Call] = []

    def add(self, method: str, url: str, *responses: Any) -> None:
        self.routes.setdefault((method.upper(), url), []).extend(responses)

    def ok(self, method: str, url: str, body: Any = None, status: int = 200) -> None:
        self.add(method, url, FakeResponse(status, {} if body is None else body))

    def error(self, method: str, url: str, status: int, message: str) -> None:
        self.add(
            method,
            url,
            FakeResponse(status, {"error": {"status": status, "message": message}}),
        )

    def paginate(
        self,
        base_url: str,
        pages: List[List[Any]],
        page_size: int = 50,
        container: Optional[str] = None,
    ) -> List[str]:
        """Register `pages` behind base_url, linked through `next` URLs."""
        first = with_page_size(base_url, page_size)
        urls = [first] + [
            f"{first}&offset={i * page_size}" for i in range(1, len(pages))
        ]
        for i, page in enumerate(pages):
            body = {"items": page, "next": urls[i + 1] if i + 1 < len(urls) else None}
            if container:
                body = {container: body}
            self.ok("GET", urls[i], body)
        return urls

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(
            Call(
                method=method.upper(),
                url=url,
                headers=kwargs.get("headers") or {},
                json=kwargs.get("json"),
                data=kwargs.get("data"),
                auth=kwargs.get("auth"),
            )
        )
        queue = self.routes.get((method.upper(), url))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {url}")

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        response.url = url
        return response

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.request("PUT", url, **kwargs)

    def calls_to(self, method: str, url: str) -> List[Call]:
        return [c for c in self.calls if c.method == method and c.url == url]


@pytest.fixture
def fake_spotify(monkeypatch) -> FakeSpotify:
    """Replace the requests module functions with a fake Spotify server."""
    fake = FakeSpotify()
    monkeypatch.setattr(requests, "request", fake.request)
    monkeypatch.setattr(requests, "get", fake.get)
    monkeypatch.setattr(requests, "post", fake.post)
    monkeypatch.setattr(requests, "put", fake.put)
    return fake
