"""Utilities for tracing the stages of a generator run."""

import contextvars
from contextlib import contextmanager
import logging
from time import perf_counter
from typing import Generator


_LOGGER = logging.getLogger(__name__)

# No public API
__all__: list[str] = []


_stages: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "stages", default=()
)


def current_stage() -> str:
    """Return the label of the stage currently executing, or empty."""
    return " > ".join(_stages.get())


@contextmanager
def trace_context(name: str) -> Generator[None, None, None]:
    """Log entry, exit and elapsed time of a named stage."""
    token = _stages.set(_stages.get() + (name,))
    label = current_stage()
    t1 = perf_counter()
    _LOGGER.debug("[Trace] > %s", label)
    try:
        yield
    finally:
        t2 = perf_counter()
        _stages.reset(token)
        _LOGGER.debug("[Trace] < %s (%0.2fs)", label, (t2 - t1))
