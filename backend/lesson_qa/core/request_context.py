"""
Request/run context helpers.

A small context (request_id, run_id, mode) lives in ContextVars so the HTTP
middleware and the QA pipeline can make their log lines correlatable.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional


_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_run_id: ContextVar[Optional[str]] = ContextVar("run_id", default=None)
_mode: ContextVar[Optional[str]] = ContextVar("mode", default=None)


def set_context(
    *,
    request_id: Optional[str] = None,
    run_id: Optional[str] = None,
    mode: Optional[str] = None,
) -> None:
    if request_id is not None:
        _request_id.set(request_id)
    if run_id is not None:
        _run_id.set(run_id)
    if mode is not None:
        _mode.set(mode)


def clear_context() -> None:
    _request_id.set(None)
    _run_id.set(None)
    _mode.set(None)


def clear_run_context() -> None:
    """Drop run_id / mode, keeping the request id."""
    _run_id.set(None)
    _mode.set(None)


def get_context() -> Dict[str, Any]:
    ctx: Dict[str, Any] = {}
    rid = _request_id.get()
    run = _run_id.get()
    mode = _mode.get()

    if rid:
        ctx["request_id"] = rid
    if run:
        ctx["run_id"] = run
    if mode:
        ctx["mode"] = mode
    return ctx
