"""Custom function handlers exposed to Slack workflows."""

from .post_request_message import (
    FUNCTION_CALLBACK_ID,
    delete_request,
    open_edit_modal,
    post_request,
    save_edit,
)
from .result import StepResult, StepStatus

__all__ = [
    "FUNCTION_CALLBACK_ID",
    "StepResult",
    "StepStatus",
    "delete_request",
    "open_edit_modal",
    "post_request",
    "save_edit",
]
