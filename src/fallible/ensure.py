"""Turn optional values into ``Result`` and ``AsyncResult`` values."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from typing import Any, TypeVar, overload

from .async_result import AsyncResult, _Lazy
from .errors import NullError, RejectionError
from .result import Failure, Result, Success

__all__ = ["ensure"]

T = TypeVar("T")


def _present(value: T | None) -> Result[T, NullError]:
    if value is None:
        return Failure(NullError())
    return Success(value)


@overload
def ensure(  # type: ignore[overload-overlap]
    value: Awaitable[T | None],
) -> AsyncResult[T, NullError | RejectionError]: ...


@overload
def ensure(value: T | None) -> Result[T, NullError]: ...


def ensure(value: Any) -> Result[Any, NullError] | AsyncResult[Any, NullError | RejectionError]:
    """
    Require *value* to be present.

    ``None`` becomes ``Failure(NullError)``; anything else, falsy values such
    as ``0``, ``""``, ``False`` and NaN included, becomes ``Success(value)``.

    An awaitable gives an ``AsyncResult``. If awaiting it raises, the result is
    ``Failure(RejectionError)`` with the exception in ``cause``.

    *value* is meant to be data; pass callables to ``attempt`` instead.

    Example::

        ensure(config.get("port"))       # Success(8080) or Failure(NullError())
        await ensure(repo.find(user_id)) # Success(user) or Failure(...)
    """
    if inspect.isawaitable(value):
        pending: Awaitable[Any] = value

        async def _ensured() -> Result[Any, NullError | RejectionError]:
            try:
                resolved = await pending
            except Exception as exc:
                return Failure(RejectionError(exc))
            return _present(resolved)

        return AsyncResult(_Lazy(_ensured))
    return _present(value)
