"""Per-request correlation IDs.

The middleware opens a scope for each request; log records written inside
it, including those from handlers running in the worker thread pool, carry
the same ``correlationId``.
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

CORRELATION_ID_HEADER = "X-Correlation-ID"

_current: ContextVar[str] = ContextVar("taskapi_correlation_id", default="")


def current_correlation_id() -> str:
    """Return the ID of the request being handled, or "" outside one."""
    return _current.get()


@contextmanager
def correlation_scope(cid: str | None = None) -> Iterator[str]:
    """Bind ``cid`` (or a fresh UUID4) as the current correlation ID."""
    cid = cid or str(uuid.uuid4())
    token = _current.set(cid)
    try:
        yield cid
    finally:
        _current.reset(token)
