"""Shared Slack Web API doubles for handler tests."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest
from slack_sdk.errors import SlackApiError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover - import-time guard
    sys.path.insert(0, str(ROOT))


class DummyResponse(dict):
    """Minimal Slack response stub for error handling tests."""

    def __init__(self, error: str = "invalid_arguments", status_code: int = 200) -> None:
        super().__init__({"ok": False, "error": error})
        self.status_code = status_code

    @property
    def data(self) -> dict[str, object]:
        return dict(self)


class FakeSlackWebClient:
    """In-memory stand-in for ``slack_sdk.WebClient``.

    Posted messages are kept keyed by ``(channel, ts)`` so handlers can read
    back the metadata they wrote. Method names listed in ``failing`` raise
    ``SlackApiError`` with ``<method>_failed`` as the error code.
    """

    def __init__(self, bot_user_id: str = "UBOT") -> None:
        self.bot_user_id = bot_user_id
        self.calls: list[tuple[str, dict]] = []
        self.failing: set[str] = set()
        self.messages: dict[tuple[str, str], dict] = {}
        self._counter = 0

    def _record(self, name: str, kwargs: dict) -> None:
        self.calls.append((name, kwargs))
        if name in self.failing:
            raise SlackApiError(f"{name} failed", DummyResponse(error=f"{name}_failed"))

    def calls_to(self, name: str) -> list[dict]:
        return [kwargs for called, kwargs in self.calls if called == name]

    def conversations_join(self, **kwargs):
        self._record("conversations_join", kwargs)
        return {"ok": True, "channel": {"id": kwargs["channel"]}}

    def auth_test(self, **kwargs):
        self._record("auth_test", kwargs)
        return {"ok": True, "user_id": self.bot_user_id}

    def chat_postMessage(self, **kwargs):
        self._record("chat_postMessage", kwargs)
        self._counter += 1
        ts = f"1700000000.{self._counter:06d}"
        message = {"ts": ts, "text": kwargs["text"], "blocks": kwargs.get("blocks", [])}
        if kwargs.get("metadata") is not None:
            message["metadata"] = kwargs["metadata"]
        self.messages[(kwargs["channel"], ts)] = message
        return {"ok": True, "channel": kwargs["channel"], "ts": ts, "message": message}

    def conversations_replies(self, **kwargs):
        self._record("conversations_replies", kwargs)
        message = self.messages.get((kwargs["channel"], kwargs["ts"]))
        return {"ok": True, "messages": [message] if message else []}

    def chat_update(self, **kwargs):
        self._record("chat_update", kwargs)
        key = (kwargs["channel"], kwargs["ts"])
        if key not in self.messages:
            raise SlackApiError("message_not_found", DummyResponse(error="message_not_found"))
        message = {"ts": kwargs["ts"], "text": kwargs["text"], "blocks": kwargs.get("blocks", [])}
        if kwargs.get("metadata") is not None:
            message["metadata"] = kwargs["metadata"]
        self.messages[key] = message
        return {"ok": True, "channel": kwargs["channel"], "ts": kwargs["ts"]}

    def chat_delete(self, **kwargs):
        self._record("chat_delete", kwargs)
        if self.messages.pop((kwargs["channel"], kwargs["ts"]), None) is None:
            raise SlackApiError("message_not_found", DummyResponse(error="message_not_found"))
        return {"ok": True}

    def views_open(self, **kwargs):
        self._record("views_open", kwargs)
        return {"ok": True, "view": {"id": "V123", **kwargs["view"]}}

    def views_update(self, **kwargs):
        self._record("views_update", kwargs)
        return {"ok": True, "view": {"id": kwargs["view_id"], **kwargs["view"]}}


@pytest.fixture
def web_client() -> FakeSlackWebClient:
    return FakeSlackWebClient()
