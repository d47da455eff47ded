"""Thin wrapper utilities around the Slack WebClient."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from slack_sdk import WebClient


class SlackClient:
    """Encapsulate the Slack Web API calls the request workflow relies on.

    Every method lets :class:`slack_sdk.errors.SlackApiError` propagate; callers
    decide how a failed call maps onto the workflow step result.
    """

    def __init__(self, *, token: str | None = None, client: WebClient | None = None) -> None:
        if client is None and token is None:
            raise ValueError("Either an instantiated client or a bot token must be provided.")

        self._client = client or WebClient(token=token)

    @property
    def client(self) -> WebClient:
        """Expose the underlying WebClient for advanced use cases."""

        return self._client

    def join_channel(self, *, channel: str) -> Mapping[str, Any]:
        return self._client.conversations_join(channel=channel)

    def bot_user_id(self) -> str | None:
        """Return the user id of the bot identity behind the token."""

        return self._client.auth_test().get("user_id")

    def post_message(
        self,
        *,
        channel: str,
        text: str,
        blocks: Sequence[Mapping[str, Any]] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:
        """Post a message, optionally with Block Kit content and message metadata."""

        kwargs: dict[str, Any] = {"channel": channel, "text": text}
        if blocks is not None:
            kwargs["blocks"] = list(blocks)
        if metadata is not None:
            kwargs["metadata"] = dict(metadata)
        return self._client.chat_postMessage(**kwargs)

    def fetch_message(self, *, channel: str, ts: str) -> Mapping[str, Any] | None:
        """Return the single message at *ts* with its metadata, or None."""

        response = self._client.conversations_replies(
            channel=channel,
            ts=ts,
            inclusive=True,
            include_all_metadata=True,
            limit=1,
        )
        messages = response.get("messages") or []
        return messages[0] if messages else None

    def update_message(
        self,
        *,
        channel: str,
        ts: str,
        text: str,
        blocks: Sequence[Mapping[str, Any]],
        metadata: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:
        """Overwrite an existing Slack message in place."""

        kwargs: dict[str, Any] = {"channel": channel, "ts": ts, "text": text, "blocks": list(blocks)}
        if metadata is not None:
            kwargs["metadata"] = dict(metadata)
        return self._client.chat_update(**kwargs)

    def delete_message(self, *, channel: str, ts: str) -> Mapping[str, Any]:
        return self._client.chat_delete(channel=channel, ts=ts)

    def open_modal(
        self,
        *,
        view: Mapping[str, Any],
        trigger_id: str | None = None,
        interactivity_pointer: str | None = None,
    ) -> Mapping[str, Any]:
        """Open a modal using whichever short-lived credential the event carried."""

        if interactivity_pointer:
            return self._client.views_open(interactivity_pointer=interactivity_pointer, view=dict(view))
        if trigger_id:
            return self._client.views_open(trigger_id=trigger_id, view=dict(view))
        raise ValueError("A trigger_id or interactivity_pointer is required to open a modal.")

    def update_modal(self, *, view_id: str, view: Mapping[str, Any]) -> Mapping[str, Any]:
        return self._client.views_update(view_id=view_id, view=dict(view))
