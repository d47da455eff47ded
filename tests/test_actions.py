"""Tests for the submitter permission check and edit-session parsing."""

import json

import pytest

from editable_request.actions import EditSession, is_submitter, parse_edit_session
from editable_request.messages import MessageMetadata, build_message


def _metadata(event_type="editable-workflow-message", **payload):
    return MessageMetadata(event_type=event_type, event_payload=payload)


def test_submitter_is_authorized():
    metadata = MessageMetadata.model_validate(build_message("printer broken", "U1")["metadata"])

    assert is_submitter(metadata, "U1") is True


@pytest.mark.parametrize(
    "metadata, user_id",
    [
        (_metadata(description="d", submitterId="U1"), "U2"),
        (_metadata(event_type="something-else", description="d", submitterId="U1"), "U1"),
        (_metadata(description="d"), "U1"),
        (None, "U1"),
        (_metadata(description="d", submitterId="U1"), None),
        (_metadata(description="d", submitterId=""), ""),
    ],
)
def test_any_mismatch_denies(metadata, user_id):
    assert is_submitter(metadata, user_id) is False


def test_edit_session_round_trips_through_private_metadata():
    session = EditSession(channel="C1", ts="1700000000.000100", submitter_id="U1")

    raw = session.to_private_metadata()

    assert json.loads(raw) == {"channel": "C1", "ts": "1700000000.000100", "submitterId": "U1"}
    assert parse_edit_session(raw) == session


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "",
        "not-json",
        '["array"]',
        '{"channel": "C1", "ts": "1.0"}',
        '{"channel": "C1", "ts": 1.0, "submitterId": "U1"}',
        '{"channel": "", "ts": "1.0", "submitterId": "U1"}',
    ],
)
def test_parse_edit_session_invalid(payload):
    with pytest.raises(ValueError):
        parse_edit_session(payload)
