"""Manifest, workflow and trigger definitions for the request shortcut."""

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
from .submit_request import (
    POST_REQUEST_MESSAGE,
    SUBMIT_REQUEST_TRIGGER,
    SUBMIT_REQUEST_WORKFLOW,
    WORKFLOW_CALLBACK_ID,
    build_manifest,
)

__all__ = [
    "AppManifest",
    "FunctionDefinition",
    "ParameterDefinition",
    "ParameterSchema",
    "TriggerDefinition",
    "TriggerInput",
    "WorkflowDefinition",
    "WorkflowStep",
    "POST_REQUEST_MESSAGE",
    "SUBMIT_REQUEST_TRIGGER",
    "SUBMIT_REQUEST_WORKFLOW",
    "WORKFLOW_CALLBACK_ID",
    "build_manifest",
]
