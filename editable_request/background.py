"""Background executor used to acknowledge Slack requests before handling them."""

from contextvars import copy_context
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from structlog.contextvars import bind_contextvars


_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="slack-events")


def run_async(
    func: Callable[..., Any],
    /,
    *args: Any,
    trace_id: str | None = None,
    **kwargs: Any,
) -> Future:
    """Run *func* on the shared pool with the caller's structlog context.

    When *trace_id* is given it is bound inside the copied context so every
    log event emitted by the worker carries it.
    """

    context = copy_context()
    if trace_id is not None:
        context.run(bind_contextvars, trace_id=trace_id)

    return _executor.submit(context.run, func, *args, **kwargs)
