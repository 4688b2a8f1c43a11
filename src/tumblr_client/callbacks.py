"""Callback / awaitable calling conventions.

Every request method accepts an optional ``callback``. With a callback the
request runs as a task on the running event loop, the callback receives
``(error, body, raw_response)`` and the method returns ``None``. Without one
the method returns an awaitable that resolves to the body or raises.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

Callback = Callable[[Exception | None, Any, httpx.Response | None], Any]

# Strong references to in-flight callback tasks
_pending: set[asyncio.Task] = set()


@dataclass
class RequestResult:
    """Unwrapped body plus the raw response it came from."""

    body: Any
    response: httpx.Response | None = None


def split_callback(params: Any = None, callback: Callback | None = None) -> tuple[dict[str, Any], Callback | None]:
    """Separate params from a callback passed in the params position.

    Args:
        params: Request params, or the callback itself
        callback: Explicit callback

    Returns:
        Tuple of (params dict, callback or None)

    Raises:
        TypeError: If params is neither a mapping nor callable, or the
            callback is not callable
    """
    if callable(params) and callback is None:
        return {}, params
    if callback is not None and not callable(callback):
        raise TypeError(f"callback must be callable, got {type(callback).__name__}")
    if params is None:
        return {}, callback
    if not isinstance(params, dict):
        raise TypeError(f"params must be a dict, got {type(params).__name__}")
    return dict(params), callback


async def _unwrap(operation: Awaitable[RequestResult]) -> Any:
    result = await operation
    return result.body


async def _notify(callback: Callback, error: Exception | None, body: Any, response: httpx.Response | None) -> None:
    try:
        outcome = callback(error, body, response)
        if inspect.isawaitable(outcome):
            await outcome
    except Exception:
        logger.exception("Request callback raised")


async def _settle(operation: Awaitable[RequestResult], callback: Callback) -> Any:
    """Run ``operation`` and report its outcome to ``callback``, then re-raise."""
    try:
        result = await operation
    except Exception as e:
        await _notify(callback, e, None, getattr(e, "response", None))
        raise
    await _notify(callback, None, result.body, result.response)
    return result.body


async def _deliver(operation: Awaitable[RequestResult], callback: Callback) -> None:
    try:
        await _settle(operation, callback)
    except Exception:
        # Already handed to the callback
        return


def _running_loop(operation: Coroutine) -> asyncio.AbstractEventLoop:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        operation.close()
        raise RuntimeError("Callbacks and promise mode need a running event loop") from None


def _spawn(loop: asyncio.AbstractEventLoop, coro: Coroutine) -> asyncio.Task:
    task = loop.create_task(coro)
    _pending.add(task)
    task.add_done_callback(_pending.discard)
    return task


def deliver(operation: Coroutine[Any, Any, RequestResult], callback: Callback | None) -> Awaitable[Any] | None:
    """Apply the calling convention to a pending request.

    Args:
        operation: Coroutine performing the request
        callback: Optional callback

    Returns:
        None when a callback is given, otherwise an awaitable of the body

    Raises:
        RuntimeError: If a callback is given outside a running event loop
    """
    if callback is None:
        return _unwrap(operation)
    loop = _running_loop(operation)
    _spawn(loop, _deliver(operation, callback))
    return None


def _retrieve(task: asyncio.Task) -> None:
    if not task.cancelled():
        task.exception()


def deliver_both(operation: Coroutine[Any, Any, RequestResult], callback: Callback | None) -> asyncio.Task:
    """Promise-mode delivery: always a task, and the callback too when given.

    Must be called from a running event loop.
    """
    loop = _running_loop(operation)
    if callback is None:
        return _spawn(loop, _unwrap(operation))
    task = _spawn(loop, _settle(operation, callback))
    # The callback already saw the error, awaiting the task is optional
    task.add_done_callback(_retrieve)
    return task
