"""Logging utilities.

Records carry the agent run id and the current planning step, both taken from context
variables so that concurrent runs under asyncio keep their own values.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Iterator

from rich.logging import RichHandler


_run_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("zace_run_id", default="-")
_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("zace_step", default="-")

_FORMAT = "run=%(run_id)s step=%(step)s %(name)s: %(message)s"


class _RunContextFilter(logging.Filter):
    """Stamp ``run_id`` and ``step`` on every record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.run_id = _run_id_var.get()  # type: ignore[attr-defined]
        record.step = _step_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def run_context(*, run_id: str) -> Iterator[None]:
    """Bind a run id for the duration of the block. The step resets when it exits."""

    token_run = _run_id_var.set(run_id)
    token_step = _step_var.set("-")
    try:
        yield
    finally:
        _step_var.reset(token_step)
        _run_id_var.reset(token_run)


def configure_logging(level: str = "INFO") -> None:
    """Route logging through a single rich handler at ``level``."""

    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = next((h for h in root.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
        root.addHandler(handler)
    if not any(isinstance(f, _RunContextFilter) for f in handler.filters):
        handler.addFilter(_RunContextFilter())
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


def log_step(step: int, message: str) -> None:
    """Bind ``step`` to the logging context and announce it."""

    _step_var.set(str(step))
    logging.getLogger("zace.steps").info("[step %d] %s", step, message)
