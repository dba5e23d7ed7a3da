"""Turn fallible operations into ``Result`` and ``AsyncResult`` values."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias, TypeVar, overload

from .async_result import AsyncResult, _Lazy
from .errors import CapturedError
from .result import Failure, Result, Success

__all__ = ["Initiator", "attempt", "attempt_awaitable", "attempt_initiator"]

T = TypeVar("T")

Initiator: TypeAlias = Callable[[Callable[[T], None], Callable[[Any], None]], object]
"""A callable receiving ``resolve`` and ``reject`` callbacks, e.g. ``lambda resolve, reject: ...``."""

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _required_positional(fn: Callable[..., object]) -> int:
    """Count the positional parameters of *fn* that have no default."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 0
    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty
    )


@overload
def attempt(operation: Awaitable[T]) -> AsyncResult[T, CapturedError]: ...


@overload
def attempt(  # type: ignore[overload-overlap]
    operation: Callable[[], Awaitable[T]],
) -> AsyncResult[T, CapturedError]: ...


@overload
def attempt(operation: Callable[[], T]) -> Result[T, CapturedError]: ...


@overload
def attempt(operation: Initiator[T]) -> AsyncResult[T, CapturedError]: ...


def attempt(operation: Any) -> Result[Any, CapturedError] | AsyncResult[Any, CapturedError]:
    """
    Run *operation* and capture its outcome.

    *operation* is classified by shape:

    - an awaitable is awaited (see ``attempt_awaitable``);
    - a callable with no required positional parameters is a thunk and is
      called immediately. A plain return value gives a ``Result``; an
      awaitable return value gives an ``AsyncResult``. A coroutine function
      is not called until the ``AsyncResult`` is awaited;
    - a callable with one or more required positional parameters is an
      initiator and is called with ``resolve`` and ``reject`` callbacks
      (see ``attempt_initiator``).

    Anything raised or rejected becomes ``Failure(CapturedError)`` with the
    original value in ``cause``.

    Example::

        attempt(lambda: int("42"))       # Success(42)
        attempt(lambda: int("x"))        # Failure(CapturedError(...))
        await attempt(fetch_page)        # Success(...) or Failure(...)
    """
    if inspect.isawaitable(operation):
        return attempt_awaitable(operation)
    if not callable(operation):
        msg = "attempt() requires a callable or an awaitable"
        raise TypeError(msg)
    if _required_positional(operation):
        return attempt_initiator(operation)
    if inspect.iscoroutinefunction(operation):
        return attempt_awaitable(_Lazy(operation))

    try:
        value = operation()
    except Exception as exc:
        return Failure(CapturedError(exc))
    if inspect.isawaitable(value):
        return attempt_awaitable(value)
    return Success(value)


def attempt_awaitable(awaitable: Awaitable[T]) -> AsyncResult[T, CapturedError]:
    """Await *awaitable*, turning a raised exception into ``Failure(CapturedError)``."""

    async def _captured() -> Result[T, CapturedError]:
        try:
            return Success(await awaitable)
        except Exception as exc:
            return Failure(CapturedError(exc))

    return AsyncResult(_Lazy(_captured))


def attempt_initiator(initiator: Initiator[T]) -> AsyncResult[T, CapturedError]:
    """
    Lift a callback-style API into an ``AsyncResult``.

    *initiator* is not called until the returned ``AsyncResult`` is first
    awaited, so an ``AsyncResult`` that is never awaited never starts it.
    It is then called with ``resolve(value=None)`` and ``reject(reason)``,
    trimmed to the number of required positional parameters it declares;
    parameters beyond the second receive ``None``. Both callbacks may be
    called from any thread. The first call settles the result and later calls
    are ignored. An exception raised by *initiator* counts as ``reject(exc)``.

    Use this directly when the initiator's parameters all have defaults, as
    ``attempt`` would take it for a thunk.

    Example::

        def start(resolve, reject):
            client.get("/status", on_done=resolve, on_error=reject)

        result = await attempt_initiator(start)
    """

    call: Callable[..., object] = initiator
    arity = _required_positional(initiator) or 2

    async def _initiated() -> Result[T, CapturedError]:
        loop = asyncio.get_running_loop()
        settled: asyncio.Future[Result[T, CapturedError]] = loop.create_future()

        def _settle(result: Result[T, CapturedError]) -> None:
            if not settled.done():
                settled.set_result(result)

        def resolve(value: Any = None) -> None:
            loop.call_soon_threadsafe(_settle, Success(value))

        def reject(reason: Any = None) -> None:
            loop.call_soon_threadsafe(_settle, Failure(CapturedError(reason)))

        callbacks = (resolve, reject, *([None] * (arity - 2)))
        try:
            call(*callbacks[:arity])
        except Exception as exc:
            reject(exc)
        return await settled

    return AsyncResult(_Lazy(_initiated))
