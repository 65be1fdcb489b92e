"""Logging utilities.

Records carry the document source (for example the revision whose description is being
read) and the pipeline operation working on it. Both are bound with `source_context`
and injected by a handler filter.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Iterator

from rich.logging import RichHandler

_source_var: contextvars.ContextVar[str] = contextvars.ContextVar("plancommit_source", default="-")
_operation_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "plancommit_operation", default="-"
)

# RichHandler renders time and level itself.
_FORMAT = "source=%(source)s op=%(operation)s %(name)s: %(message)s"


class _ContextFilter(logging.Filter):
    """Inject the bound source and operation into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.source = _source_var.get()  # type: ignore[attr-defined]
        record.operation = _operation_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def source_context(*, source: str | None, operation: str | None = None) -> Iterator[None]:
    """Temporarily bind the document source and operation.

    Args:
        source: Identifier of the text being read or written. None keeps the
            source bound by an enclosing context.
        operation: Pipeline operation name, e.g. `normalize`.
    """

    token_source = _source_var.set(source if source is not None else _source_var.get())
    token_operation = _operation_var.set(operation or _operation_var.get())
    try:
        yield
    finally:
        _operation_var.reset(token_operation)
        _source_var.reset(token_source)


def current_source() -> str:
    return _source_var.get()


def current_operation() -> str:
    return _operation_var.get()


def configure_logging(level: str | int = "INFO") -> RichHandler:
    """Install the rich handler on the root logger and set the level.

    Repeated calls reuse the installed handler and only change the level.

    Returns:
        The handler carrying the context filter.
    """

    root = logging.getLogger()
    root.setLevel(level)

    handler = next((h for h in root.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
        root.addHandler(handler)
    if not any(isinstance(f, _ContextFilter) for f in handler.filters):
        handler.addFilter(_ContextFilter())
    handler.setFormatter(logging.Formatter(fmt=_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)
