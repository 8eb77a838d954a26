"""JSONL audit trail for provisioning runs."""

from __future__ import annotations

import getpass
import os
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from sitesetup.models import AuditEvent


def _get_actor() -> str:
    return os.environ.get("WEB_SITE_ACTOR") or getpass.getuser()


def _write_jsonl(path: Path, event: AuditEvent) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a") as f:
        f.write(event.to_jsonl() + "\n")


@contextmanager
def audit(
    action: str,
    target: str = "",
    *,
    path: Path | None = None,
    **params: Any,
) -> Generator[AuditEvent, None, None]:
    """Context manager that records timing and success/failure.

    The event is appended to ``path`` when one is given; without a path the
    event is still built (and yielded) but not persisted.
    """
    event = AuditEvent(
        actor=_get_actor(),
        action=action,
        target=target,
        params=params,
    )
    start = time.monotonic()
    try:
        yield event
        event.result = "success"
    except Exception as exc:
        event.result = "failure"
        event.error = str(exc)
        raise
    finally:
        event.duration_ms = int((time.monotonic() - start) * 1000)
        if path is not None:
            _write_jsonl(path, event)
