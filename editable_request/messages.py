"""Block Kit message builder and message metadata models for posted requests."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

METADATA_EVENT_TYPE = "editable-workflow-message"
EDIT_ACTION_ID = "edit-message"

_DESCRIPTION_HEADING = "*Description of the issue:*"


class RequestPayload(BaseModel):
    """The request as carried in the message metadata ``event_payload``."""

    model_config = ConfigDict(populate_by_name=True)

    description: str
    submitter_id: str = Field(..., alias="submitterId")


class MessageMetadata(BaseModel):
    event_type: str
    event_payload: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_message(cls, message: Mapping[str, Any] | None) -> "MessageMetadata | None":
        """Return the metadata attached to *message*, or None when absent or malformed."""

        if not message:
            return None
        raw = message.get("metadata")
        if not isinstance(raw, Mapping):
            return None
        try:
            return cls.model_validate(dict(raw))
        except ValidationError:
            return None

    def request(self) -> RequestPayload | None:
        """Parse the payload as a request; None when a field is missing."""

        try:
            return RequestPayload.model_validate(self.event_payload)
        except ValidationError:
            return None


def _format_description(description: str) -> str:
    return f"{_DESCRIPTION_HEADING}\n{description}\n\n"


def build_message(description: str, submitter_id: str) -> Dict[str, Any]:
    """Build the request message: text, blocks with an Edit button, and metadata.

    The metadata payload is the only record of the request, so it always
    carries both the description and the submitter id.
    """

    text = _format_description(description)
    blocks: List[Dict[str, Any]] = [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": text},
            "accessory": {
                "type": "button",
                "text": {"type": "plain_text", "text": "Edit"},
                "value": "clicked",
                "action_id": EDIT_ACTION_ID,
            },
        }
    ]
    payload = RequestPayload(description=description, submitter_id=submitter_id)

    return {
        "text": text,
        "blocks": blocks,
        "metadata": {
            "event_type": METADATA_EVENT_TYPE,
            "event_payload": payload.model_dump(by_alias=True),
        },
    }


def build_invite_message(*, bot_user_id: str | None, channel: str) -> str:
    """Text asking a channel member to invite the bot after a failed join."""

    return f"Please invite this app's bot user <@{bot_user_id}> to this channel <#{channel}>"
