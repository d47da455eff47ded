"""Tests for the Edit button handler."""

import json
import logging

import pytest

import app as app_module
from editable_request.functions import StepStatus, open_edit_modal
from editable_request.messages import build_message
from editable_request.slack_client import SlackClient


def _post(web_client, description="printer broken", submitter_id="U1", channel="C1"):
    message = build_message(description, submitter_id)
    return web_client.chat_postMessage(channel=channel, **message)["ts"]


def _open(web_client, *, ts, user_id, channel="C1", trigger_id="T1", interactivity_pointer=None):
    return open_edit_modal(
        client=SlackClient(client=web_client),
        channel=channel,
        message_ts=ts,
        user_id=user_id,
        trigger_id=trigger_id,
        interactivity_pointer=interactivity_pointer,
    )


def test_submitter_gets_prefilled_edit_modal(web_client):
    ts = _post(web_client)

    result = _open(web_client, ts=ts, user_id="U1", interactivity_pointer="PTR")

    assert result.status is StepStatus.PENDING
    (opened,) = web_client.calls_to("views_open")
    assert opened["interactivity_pointer"] == "PTR"
    view = opened["view"]
    assert view["title"]["text"] == "Edit/delete message"
    assert view["blocks"][1]["element"]["initial_value"] == "printer broken"
    assert view["blocks"][0]["accessory"]["value"] == ts
    assert json.loads(view["private_metadata"]) == {"channel": "C1", "ts": ts, "submitterId": "U1"}
    assert web_client.calls_to("conversations_replies") == [
        {"channel": "C1", "ts": ts, "inclusive": True, "include_all_metadata": True, "limit": 1}
    ]


def test_other_user_gets_permission_denied_without_prefill(web_client):
    ts = _post(web_client)

    result = _open(web_client, ts=ts, user_id="U2")

    assert result.status is StepStatus.PENDING
    (opened,) = web_client.calls_to("views_open")
    view = opened["view"]
    assert view["title"]["text"] == "Permission denied"
    assert "printer broken" not in json.dumps(view)
    assert "private_metadata" not in view


def test_foreign_metadata_tag_is_not_trusted(web_client):
    web_client.messages[("C1", "1.0")] = {
        "ts": "1.0",
        "text": "x",
        "metadata": {"event_type": "other-app", "event_payload": {"description": "d", "submitterId": "U1"}},
    }

    _open(web_client, ts="1.0", user_id="U1")

    (opened,) = web_client.calls_to("views_open")
    assert opened["view"]["title"]["text"] == "Permission denied"


def test_missing_message_reference_is_an_error(web_client):
    result = _open(web_client, ts=None, user_id="U1")

    assert result.status is StepStatus.FAILED
    assert "non-channel message" in result.error
    assert "(channel: C1)" in result.error
    assert web_client.calls == []


@pytest.mark.parametrize("setup", ["fetch_fails", "no_message", "no_metadata"])
def test_unreadable_message_is_an_error(web_client, setup):
    if setup == "fetch_fails":
        web_client.failing.add("conversations_replies")
    elif setup == "no_metadata":
        web_client.chat_postMessage(channel="C1", text="plain")

    result = _open(web_client, ts="1700000000.000001", user_id="U1")

    assert result.status is StepStatus.FAILED
    assert result.error == "Failed to access a message (channel: C1, ts: 1700000000.000001)"
    assert web_client.calls_to("views_open") == []


def test_modal_open_failure_is_an_error(web_client):
    ts = _post(web_client)
    web_client.failing.add("views_open")

    result = _open(web_client, ts=ts, user_id="U1")

    assert result.status is StepStatus.FAILED
    assert result.error == "Failed to open a modal view (error: views_open_failed)"


def test_edit_listener_reads_channel_from_function_inputs(web_client):
    ts = _post(web_client)
    acks = []
    failures = []
    body = {
        "user": {"id": "U1"},
        "trigger_id": "T1",
        "message": {"ts": ts},
        "interactivity": {"interactivity_pointer": "PTR"},
        "function_data": {"execution_id": "Fx1", "inputs": {"channel": "C1", "submitterId": "U1"}},
        "actions": [{"action_id": "edit-message", "value": "clicked"}],
    }

    result = app_module._handle_edit_action(
        ack=lambda payload=None: acks.append(payload),
        body=body,
        client=web_client,
        logger=logging.getLogger(__name__),
        complete=lambda outputs=None: pytest.fail("step must stay open"),
        fail=lambda error: failures.append(error),
    )

    assert acks == [None]
    assert result.status is StepStatus.PENDING
    assert failures == []
    assert web_client.calls_to("views_open")[0]["interactivity_pointer"] == "PTR"


def test_edit_listener_fails_step_outside_message(web_client):
    failures = []
    body = {
        "user": {"id": "U1"},
        "function_data": {"inputs": {"channel": "C1"}},
        "actions": [{"action_id": "edit-message"}],
    }

    app_module._handle_edit_action(
        ack=lambda payload=None: None,
        body=body,
        client=web_client,
        logger=logging.getLogger(__name__),
        fail=lambda error: failures.append(error),
    )

    assert len(failures) == 1
    assert "non-channel message" in failures[0]
