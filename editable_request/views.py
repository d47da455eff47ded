"""Modal views shown while editing or deleting a posted request."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ValidationError

from editable_request.actions import EditSession
from editable_request.messages import EDIT_ACTION_ID

DELETE_ACTION_ID = "delete-message"
DELETED_CALLBACK_ID = "message-deleted"
DESCRIPTION_BLOCK_ID = "description"
DESCRIPTION_ACTION_ID = "input"

PERMISSION_DENIED_TEXT = (
    ":warning: Sorry! Only the person who submitted this request has the ability "
    "to edit or delete the posted message."
)


def _plain_text(text: str) -> Dict[str, str]:
    return {"type": "plain_text", "text": text}


def _mrkdwn_section(text: str) -> Dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def build_permission_denied_view() -> Dict[str, Any]:
    """Read-only modal shown to anyone other than the original submitter."""

    return {
        "type": "modal",
        "callback_id": EDIT_ACTION_ID,
        "title": _plain_text("Permission denied"),
        "close": _plain_text("Close"),
        "blocks": [_mrkdwn_section(PERMISSION_DENIED_TEXT)],
    }


def build_edit_view(session: EditSession, description: str) -> Dict[str, Any]:
    """Editable modal prefilled with the current description.

    The Delete button carries the message timestamp as its value so deletion
    never has to trust the modal's private metadata.
    """

    return {
        "type": "modal",
        "callback_id": EDIT_ACTION_ID,
        "title": _plain_text("Edit/delete message"),
        "submit": _plain_text("Save"),
        "close": _plain_text("Close"),
        "private_metadata": session.to_private_metadata(),
        "blocks": [
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": " "},
                "accessory": {
                    "type": "button",
                    "style": "danger",
                    "text": _plain_text("Delete"),
                    "value": session.ts,
                    "action_id": DELETE_ACTION_ID,
                },
            },
            {
                "type": "input",
                "block_id": DESCRIPTION_BLOCK_ID,
                "element": {
                    "type": "plain_text_input",
                    "multiline": True,
                    "action_id": DESCRIPTION_ACTION_ID,
                    "initial_value": description,
                },
                "label": _plain_text("Description"),
            },
        ],
    }


def build_deleted_view() -> Dict[str, Any]:
    return {
        "type": "modal",
        "callback_id": DELETED_CALLBACK_ID,
        "title": _plain_text("Message deleted"),
        "close": _plain_text("Close"),
        "blocks": [_mrkdwn_section("The message has been deleted!")],
    }


class _InputValue(BaseModel):
    value: str | None = None


class _EditViewState(BaseModel):
    values: Dict[str, Dict[str, _InputValue]]


def extract_description(view_state: Dict[str, Any] | None) -> str:
    """Return the description submitted through the edit modal."""

    try:
        state = _EditViewState.model_validate(view_state or {})
    except ValidationError as exc:
        raise ValueError("Invalid view state.") from exc

    field = state.values.get(DESCRIPTION_BLOCK_ID, {}).get(DESCRIPTION_ACTION_ID)
    if field is None or field.value is None:
        raise ValueError("Description is missing from the submitted view.")
    return field.value
