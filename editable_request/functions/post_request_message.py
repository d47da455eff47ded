"""Handlers for the ``post_request_message`` custom function and its interactions.

Each handler performs a short sequence of Slack API calls and converts any
failure into a :class:`StepResult`; nothing is retried and no exception
escapes to the caller.
"""

from __future__ import annotations

from typing import Any, Mapping

from slack_sdk.errors import SlackApiError
import structlog

from editable_request.actions import EditSession, is_submitter, parse_edit_session
from editable_request.messages import MessageMetadata, build_invite_message, build_message
from editable_request.slack_client import SlackClient
from editable_request.views import (
    build_deleted_view,
    build_edit_view,
    build_permission_denied_view,
    extract_description,
)

from .result import StepResult

FUNCTION_CALLBACK_ID = "post_request_message"


def _log_slack_failure(log, operation: str, exc: SlackApiError) -> str:
    """Log a failed Slack call and return its error code."""

    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None) if response is not None else None
    error_code = response.get("error") if response is not None else None
    error_code = error_code or str(exc)
    log.error(
        "slack_call_failed",
        operation=operation,
        error=error_code,
        status_code=status_code,
    )
    return error_code


def _post_invite_request(client: SlackClient, channel: str, log) -> None:
    try:
        bot_user_id = client.bot_user_id()
        client.post_message(
            channel=channel,
            text=build_invite_message(bot_user_id=bot_user_id, channel=channel),
        )
    except SlackApiError as exc:
        _log_slack_failure(log, "invite_request", exc)
        return
    log.info("invite_requested", bot_user_id=bot_user_id)


def post_request(
    *,
    client: SlackClient,
    channel: str,
    submitter_id: str,
    description: str,
) -> StepResult:
    """Join *channel* and post the request message there.

    The step stays open on success because the Edit and Delete buttons are
    handled against this same function execution.
    """

    log = structlog.get_logger().bind(channel=channel, submitter_id=submitter_id)

    try:
        client.join_channel(channel=channel)
    except SlackApiError as exc:
        _log_slack_failure(log, "conversations.join", exc)
        log.warning("join_failed")
        _post_invite_request(client, channel, log)
        return StepResult.failed(f"Failed to join a channel: <#{channel}>")

    message = build_message(description, submitter_id)
    try:
        response = client.post_message(
            channel=channel,
            text=message["text"],
            blocks=message["blocks"],
            metadata=message["metadata"],
        )
    except SlackApiError as exc:
        error_code = _log_slack_failure(log, "chat.postMessage", exc)
        return StepResult.failed(f"Failed to post a message (channel: {channel}, error: {error_code})")

    log.info("request_posted", ts=response.get("ts"))
    return StepResult.pending()


def open_edit_modal(
    *,
    client: SlackClient,
    channel: str | None,
    message_ts: str | None,
    user_id: str | None,
    trigger_id: str | None = None,
    interactivity_pointer: str | None = None,
) -> StepResult:
    """Open the edit modal for the submitter, or a denial modal for anyone else."""

    log = structlog.get_logger().bind(channel=channel, ts=message_ts, user_id=user_id)

    if not message_ts or not channel:
        log.warning("edit_outside_message")
        return StepResult.failed(
            'The "edit" button is unexpectedly positioned in the non-channel message user interface! '
            f"(channel: {channel})"
        )

    access_error = f"Failed to access a message (channel: {channel}, ts: {message_ts})"
    try:
        message = client.fetch_message(channel=channel, ts=message_ts)
    except SlackApiError as exc:
        _log_slack_failure(log, "conversations.replies", exc)
        return StepResult.failed(access_error)

    metadata = MessageMetadata.from_message(message)
    if metadata is None:
        log.warning("message_metadata_missing")
        return StepResult.failed(access_error)

    if is_submitter(metadata, user_id):
        session = EditSession(
            channel=channel,
            ts=message_ts,
            submitter_id=metadata.event_payload["submitterId"],
        )
        view = build_edit_view(session, metadata.event_payload.get("description") or "")
    else:
        log.info("edit_denied", event_type=metadata.event_type)
        view = build_permission_denied_view()

    try:
        client.open_modal(view=view, trigger_id=trigger_id, interactivity_pointer=interactivity_pointer)
    except SlackApiError as exc:
        error_code = _log_slack_failure(log, "views.open", exc)
        return StepResult.failed(f"Failed to open a modal view (error: {error_code})")
    except ValueError:
        log.warning("modal_trigger_missing")
        return StepResult.failed("Failed to open a modal view (error: missing_trigger)")

    log.info("edit_modal_opened", view=view["title"]["text"])
    return StepResult.pending()


def delete_request(
    *,
    client: SlackClient,
    channel: str | None,
    message_ts: str | None,
    view_id: str | None = None,
) -> StepResult:
    """Delete the posted request and show a confirmation in the modal.

    The deletion is not undone when the confirmation view cannot be shown.
    """

    log = structlog.get_logger().bind(channel=channel, ts=message_ts, view_id=view_id)

    if not channel or not message_ts:
        log.warning("delete_target_missing")
        return StepResult.failed("Failed to delete a message (error: missing_message_reference)")

    try:
        client.delete_message(channel=channel, ts=message_ts)
    except SlackApiError as exc:
        error_code = _log_slack_failure(log, "chat.delete", exc)
        return StepResult.failed(f"Failed to delete a message (error: {error_code})")

    log.info("message_deleted")

    if view_id:
        try:
            client.update_modal(view_id=view_id, view=build_deleted_view())
        except SlackApiError as exc:
            error_code = _log_slack_failure(log, "views.update", exc)
            return StepResult.failed(f"Failed to update a modal view (error: {error_code})")

    return StepResult.completed()


def save_edit(
    *,
    client: SlackClient,
    private_metadata: str | None,
    view_state: Mapping[str, Any] | None,
) -> StepResult:
    """Rewrite the posted message with the description submitted in the modal.

    Authorship always comes from the edit session, never from the editor.
    """

    log = structlog.get_logger()

    try:
        session = parse_edit_session(private_metadata)
    except ValueError:
        log.warning("edit_session_invalid")
        return StepResult.failed("Failed to modify a message (error: invalid_edit_session)")

    log = log.bind(channel=session.channel, ts=session.ts, submitter_id=session.submitter_id)

    try:
        description = extract_description(dict(view_state or {}))
    except ValueError:
        log.warning("edit_description_missing")
        return StepResult.failed("Failed to modify a message (error: missing_description)")

    message = build_message(description, session.submitter_id)
    try:
        client.update_message(
            channel=session.channel,
            ts=session.ts,
            text=message["text"],
            blocks=message["blocks"],
            metadata=message["metadata"],
        )
    except SlackApiError as exc:
        error_code = _log_slack_failure(log, "chat.update", exc)
        return StepResult.failed(f"Failed to modify a message (error: {error_code})")

    log.info("message_edited")
    return StepResult.pending()
