"""Application entry point for the editable request workflow app."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from flask import Flask, jsonify, request, copy_current_request_context
from slack_bolt import App as SlackApp
from slack_bolt.adapter.flask import SlackRequestHandler
import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

from editable_request.background import run_async
from editable_request.config import AppSettings, get_settings
from editable_request.functions import (
    FUNCTION_CALLBACK_ID,
    StepResult,
    StepStatus,
    delete_request,
    open_edit_modal,
    post_request,
    save_edit,
)
from editable_request.logging_config import configure_logging
from editable_request.messages import EDIT_ACTION_ID
from editable_request.security import (
    SLACK_SIGNATURE_HEADER,
    SLACK_TIMESTAMP_HEADER,
    is_valid_slack_request,
)
from editable_request.slack_client import SlackClient
from editable_request.views import DELETE_ACTION_ID


def _create_bolt_app(settings: AppSettings) -> SlackApp:
    """Initialise the Slack Bolt application using validated settings."""

    return SlackApp(
        token=settings.bot_token,
        signing_secret=settings.signing_secret,
        token_verification_enabled=False,
    )


def _register_error_handlers(flask_app: Flask) -> None:
    """Register a JSON error handler that attaches a trace identifier."""

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):  # type: ignore[override]
        trace_id = str(uuid4())
        flask_app.logger.exception(
            "Unhandled application error", extra={"trace_id": trace_id}, exc_info=error
        )
        response = jsonify({"error": "internal_server_error", "trace_id": trace_id})
        response.status_code = 500
        return response


def _function_inputs(body: dict) -> dict:
    return (body.get("function_data") or {}).get("inputs") or {}


def _first_action(body: dict) -> dict:
    actions = body.get("actions") or []
    return actions[0] if actions else {}


def _apply_step_result(result: StepResult, *, complete, fail, log) -> None:
    """Report a handler outcome to the workflow step that owns the interaction."""

    if result.status is StepStatus.PENDING:
        log.info("step_continues")
        return
    if result.status is StepStatus.COMPLETED:
        log.info("step_completed")
        if complete is not None:
            complete(outputs={})
        return

    log.error("step_failed", error=result.error)
    if fail is not None:
        fail(error=result.error)


def _handle_function_execution(inputs, client, complete, fail, logger):
    trace_id = str(uuid4())
    bind_contextvars(trace_id=trace_id)
    log = structlog.get_logger().bind(trace_id=trace_id, function=FUNCTION_CALLBACK_ID)

    try:
        inputs = inputs or {}
        logger.info("Posting request message", extra={"channel": inputs.get("channel")})
        result = post_request(
            client=SlackClient(client=client),
            channel=inputs.get("channel"),
            submitter_id=inputs.get("submitterId"),
            description=inputs.get("description"),
        )
        _apply_step_result(result, complete=complete, fail=fail, log=log)
        return result
    finally:
        unbind_contextvars("trace_id")


def _handle_edit_action(ack, body, client, logger, complete=None, fail=None):
    trace_id = str(uuid4())
    bind_contextvars(trace_id=trace_id)
    log = structlog.get_logger().bind(trace_id=trace_id, action_id=EDIT_ACTION_ID)

    try:
        ack()
        inputs = _function_inputs(body)
        channel = inputs.get("channel") or (body.get("container") or {}).get("channel_id")
        message = body.get("message") or {}
        result = open_edit_modal(
            client=SlackClient(client=client),
            channel=channel,
            message_ts=message.get("ts"),
            user_id=(body.get("user") or {}).get("id"),
            trigger_id=body.get("trigger_id"),
            interactivity_pointer=(body.get("interactivity") or {}).get("interactivity_pointer"),
        )
        _apply_step_result(result, complete=complete, fail=fail, log=log)
        return result
    finally:
        unbind_contextvars("trace_id")


def _handle_delete_action(ack, body, client, logger, complete=None, fail=None):
    trace_id = str(uuid4())
    bind_contextvars(trace_id=trace_id)
    log = structlog.get_logger().bind(trace_id=trace_id, action_id=DELETE_ACTION_ID)

    try:
        ack()
        view = body.get("view") or {}
        result = delete_request(
            client=SlackClient(client=client),
            channel=_function_inputs(body).get("channel"),
            message_ts=_first_action(body).get("value"),
            view_id=view.get("id"),
        )
        _apply_step_result(result, complete=complete, fail=fail, log=log)
        return result
    finally:
        unbind_contextvars("trace_id")


def _handle_edit_submission(ack, body, client, logger, complete=None, fail=None):
    trace_id = str(uuid4())
    bind_contextvars(trace_id=trace_id)
    log = structlog.get_logger().bind(trace_id=trace_id, callback_id=EDIT_ACTION_ID)

    try:
        view = body.get("view") or {}
        # Closes the modal; the step itself stays open for later clicks.
        ack()
        result = save_edit(
            client=SlackClient(client=client),
            private_metadata=view.get("private_metadata"),
            view_state=view.get("state"),
        )
        _apply_step_result(result, complete=complete, fail=fail, log=log)
        return result
    finally:
        unbind_contextvars("trace_id")


def _register_function_handlers(bolt_app: SlackApp) -> None:
    @bolt_app.function(FUNCTION_CALLBACK_ID)
    def handle_post_request_message(inputs, client, complete, fail, logger):
        _handle_function_execution(
            inputs=inputs, client=client, complete=complete, fail=fail, logger=logger
        )


def _register_action_handlers(bolt_app: SlackApp) -> None:
    @bolt_app.action(EDIT_ACTION_ID)
    def handle_edit(ack, body, client, complete, fail, logger):
        _handle_edit_action(ack=ack, body=body, client=client, logger=logger, complete=complete, fail=fail)

    @bolt_app.action(DELETE_ACTION_ID)
    def handle_delete(ack, body, client, complete, fail, logger):
        _handle_delete_action(ack=ack, body=body, client=client, logger=logger, complete=complete, fail=fail)


def _register_view_handlers(bolt_app: SlackApp) -> None:
    @bolt_app.view(EDIT_ACTION_ID)
    def handle_edit_submission(ack, body, client, complete, fail, logger):
        _handle_edit_submission(ack=ack, body=body, client=client, logger=logger, complete=complete, fail=fail)


_LOGGING_CONFIGURED = False


def _load_version() -> str:
    version_file = Path(__file__).resolve().parent / "VERSION"
    if version_file.exists():
        return version_file.read_text(encoding="utf-8").strip()
    return "unknown"


def create_app() -> Flask:
    """Create and configure the Flask application."""

    global _LOGGING_CONFIGURED

    settings = get_settings()
    if not _LOGGING_CONFIGURED:
        configure_logging(debug=settings.debug_mode)
        _LOGGING_CONFIGURED = True

    bolt_app = _create_bolt_app(settings)
    handler = SlackRequestHandler(bolt_app)

    flask_app = Flask(__name__)
    flask_app.config["APP_VERSION"] = _load_version()
    flask_app.logger.setLevel("DEBUG" if settings.debug_mode else "INFO")
    _register_error_handlers(flask_app)
    _register_function_handlers(bolt_app)
    _register_action_handlers(bolt_app)
    _register_view_handlers(bolt_app)

    @flask_app.route("/slack/events", methods=["POST"])
    def slack_events():
        raw_body = request.get_data(as_text=True)
        timestamp = request.headers.get(SLACK_TIMESTAMP_HEADER, "")
        signature = request.headers.get(SLACK_SIGNATURE_HEADER, "")

        if not is_valid_slack_request(
            signing_secret=settings.signing_secret,
            timestamp=timestamp,
            body=raw_body,
            signature=signature,
        ):
            response = jsonify({"error": "invalid_signature"})
            response.status_code = 401
            return response

        trace_id = str(uuid4())

        @copy_current_request_context
        def process_request():
            handler.handle(request)

        run_async(process_request, trace_id=trace_id)
        return "", 200

    @flask_app.route("/healthz", methods=["GET"])
    def healthz():
        health: dict[str, object] = {"ok": True}
        health["version"] = flask_app.config.get("APP_VERSION", "unknown")

        try:
            get_settings()
            health["config"] = "valid"
        except RuntimeError as exc:
            health["config"] = "invalid"
            health["config_error"] = str(exc)
            health["ok"] = False

        status = 200 if health["ok"] else 503
        return jsonify(health), status

    return flask_app


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    application = create_app()
    application.run(host="0.0.0.0", port=3000, debug=True)
