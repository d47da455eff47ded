"""Declarative wiring for the "Submit an editable request" shortcut."""

from __future__ import annotations

from editable_request.functions import FUNCTION_CALLBACK_ID

from .models import (
    AppManifest,
    FunctionDefinition,
    ParameterDefinition,
    ParameterSchema,
    TriggerDefinition,
    TriggerInput,
    WorkflowDefinition,
    WorkflowStep,
)

APP_NAME = "editable-request"
WORKFLOW_CALLBACK_ID = "submit-editable-request"
OPEN_FORM_FUNCTION_ID = "slack#/functions/open_form"

BOT_SCOPES = [
    "commands",
    "chat:write",
    "chat:write.public",
    "channels:join",
    "channels:history",
]

POST_REQUEST_MESSAGE = FunctionDefinition(
    callback_id=FUNCTION_CALLBACK_ID,
    title="Post a request to channel",
    description="Create a request message from submitted form",
    input_parameters=ParameterSchema(
        properties={
            "channel": ParameterDefinition(type="slack#/types/channel_id"),
            "submitterId": ParameterDefinition(type="slack#/types/user_id"),
            "description": ParameterDefinition(type="string"),
        },
        required=["submitterId", "channel", "description"],
    ),
)

SUBMIT_REQUEST_WORKFLOW = WorkflowDefinition(
    callback_id=WORKFLOW_CALLBACK_ID,
    title="Submit an editable request",
    input_parameters=ParameterSchema(
        properties={
            "interactivity": ParameterDefinition(type="slack#/types/interactivity"),
            "channel": ParameterDefinition(type="slack#/types/channel_id"),
        },
        required=["channel", "interactivity"],
    ),
    steps=[
        WorkflowStep(
            id="0",
            function_id=OPEN_FORM_FUNCTION_ID,
            inputs={
                "title": "Submit a request",
                "interactivity": "{{inputs.interactivity}}",
                "submit_label": "Submit",
                "fields": {
                    "elements": [
                        {
                            "name": "description",
                            "title": "Description",
                            "type": "string",
                            "long": True,
                        }
                    ],
                    "required": ["description"],
                },
            },
        ),
        WorkflowStep(
            id="1",
            function_id=POST_REQUEST_MESSAGE.reference,
            inputs={
                "submitterId": "{{steps.0.interactivity.interactor.id}}",
                "channel": "{{inputs.channel}}",
                "description": "{{steps.0.fields.description}}",
            },
        ),
    ],
)

SUBMIT_REQUEST_TRIGGER = TriggerDefinition(
    type="shortcut",
    name="Submit an editable request",
    description="Submit an editable request to the channel",
    workflow=SUBMIT_REQUEST_WORKFLOW.reference,
    inputs={
        "interactivity": TriggerInput(value="{{data.interactivity}}"),
        "channel": TriggerInput(value="{{data.channel_id}}"),
    },
)


def build_manifest(request_url: str) -> AppManifest:
    """Return the app manifest pointing Slack at *request_url*."""

    return AppManifest(
        name=APP_NAME,
        description="Request workflow that enables submitters to edit or delete",
        bot_scopes=BOT_SCOPES,
        request_url=request_url,
        functions=[POST_REQUEST_MESSAGE],
        workflows=[SUBMIT_REQUEST_WORKFLOW],
    )
