from __future__ import annotations

from typing import Any


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(
        self, status_code: int = 200, body: Any = None, *, raw: str | None = None
    ) -> None:
        self.status_code = status_code
        self._body = body
        self._raw = raw

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._raw is not None:
            raise ValueError("not json")
        return self._body


class FakeSession:
    """Records POST calls and replays queued responses."""

    def __init__(self, *responses: FakeResponse | Exception) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
