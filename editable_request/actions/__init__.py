"""Permission checks and edit-session state for Slack interaction payloads."""

from __future__ import annotations

import json
from dataclasses import dataclass

from editable_request.messages import METADATA_EVENT_TYPE, MessageMetadata


@dataclass(frozen=True)
class EditSession:
    """State carried in an edit modal's ``private_metadata`` between open and submit."""

    channel: str
    ts: str
    submitter_id: str

    def to_private_metadata(self) -> str:
        return json.dumps({"channel": self.channel, "ts": self.ts, "submitterId": self.submitter_id})


def parse_edit_session(raw_value: str | None) -> EditSession:
    """Parse a modal's private metadata into an :class:`EditSession`."""

    try:
        payload = json.loads(raw_value or "")
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid edit session.") from exc

    if not isinstance(payload, dict):
        raise ValueError("Invalid edit session.")

    channel = payload.get("channel")
    ts = payload.get("ts")
    submitter_id = payload.get("submitterId")
    for value in (channel, ts, submitter_id):
        if not isinstance(value, str) or not value:
            raise ValueError("Invalid edit session.")

    return EditSession(channel=channel, ts=ts, submitter_id=submitter_id)


def is_submitter(metadata: MessageMetadata | None, user_id: str | None) -> bool:
    """Return True when *user_id* submitted the request described by *metadata*.

    Metadata with an unexpected event type is never trusted.
    """

    if metadata is None or not user_id:
        return False
    if metadata.event_type != METADATA_EVENT_TYPE:
        return False
    return metadata.event_payload.get("submitterId") == user_id
