"""
Awaitable counterpart of ``Result``.

``AsyncResult`` wraps an awaitable that produces a ``Result`` and exposes the
same combinators. Every callback may return its value directly or as an
awaitable; ``and_then`` and ``or_else`` callbacks may also return another
``AsyncResult``.

Example::

    async def fetch_user(user_id: int) -> Result[User, str]:
        ...

    result = await (
        AsyncResult(fetch_user(1))
        .and_then(validate_user)
        .map(format_response)
    )
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Generic, Never, ParamSpec, TypeVar, cast, overload

from ._logging import get_logger
from .errors import CapturedError
from .result import _MISSING, Failure, Result, Success

__all__ = ["AsyncResult"]

T_co = TypeVar("T_co", covariant=True)
E_co = TypeVar("E_co", covariant=True)
R = TypeVar("R")
U = TypeVar("U")
F = TypeVar("F")
P = ParamSpec("P")

logger = get_logger(__name__)


class _Settled(Generic[R]):

    """An awaitable that is already done and can be awaited any number of times."""

    __slots__ = ("_value",)

    def __init__(self, value: R) -> None:
        self._value = value

    def __await__(self) -> Generator[Any, Any, R]:
        return self._value
        yield


class _Lazy(Generic[R]):

    """An awaitable that builds the awaitable it delegates to only when awaited."""

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Awaitable[R]]) -> None:
        self._factory = factory

    def __await__(self) -> Generator[Any, Any, R]:
        return self._factory().__await__()


async def _resolve(value: R | Awaitable[R]) -> R:
    """Await *value* if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return cast("R", await value)
    return value


class AsyncResult(Generic[T_co, E_co]):

    """
    An awaitable ``Result`` with chaining combinators.

    Awaiting an ``AsyncResult`` yields the ``Result`` it settles to. The
    wrapped awaitable is driven once: the first ``await`` schedules it as a
    task on the running loop and every later ``await`` shares that outcome, so
    the producer never runs twice.

    Combinators build a new ``AsyncResult`` that awaits this one; nothing runs
    until the chain is awaited, and a chain that is dropped unawaited leaves no
    coroutine behind.
    """

    __slots__ = ("_awaitable", "_task")

    def __init__(self, awaitable: Awaitable[Result[T_co, E_co]]) -> None:
        self._awaitable = awaitable
        self._task: asyncio.Future[Result[T_co, E_co]] | None = None

    def __await__(self) -> Generator[Any, Any, Result[T_co, E_co]]:
        if isinstance(self._awaitable, _Settled):
            return self._awaitable.__await__()
        if self._task is None:
            self._task = asyncio.ensure_future(self._awaitable)
        return self._task.__await__()

    def __repr__(self) -> str:
        if isinstance(self._awaitable, _Settled):
            return f"AsyncResult({self._awaitable._value!r})"
        if self._task is not None and self._task.done() and not self._task.cancelled():
            if self._task.exception() is None:
                return f"AsyncResult({self._task.result()!r})"
        return "AsyncResult(<pending>)"

    @staticmethod
    def success(value: U | Awaitable[U]) -> AsyncResult[U, Never]:
        """
        Create an ``AsyncResult`` settling to ``Success(value)``.

        If *value* is awaitable, it is awaited and its outcome wrapped.
        """
        if inspect.isawaitable(value):
            pending = value

            async def _deferred() -> Result[U, Never]:
                return Success(await pending)

            return AsyncResult(_Lazy(_deferred))
        return AsyncResult(_Settled(Success(value)))

    @staticmethod
    def failure(error: F | Awaitable[F]) -> AsyncResult[Never, F]:
        """
        Create an ``AsyncResult`` settling to ``Failure(error)``.

        If *error* is awaitable, it is awaited and its outcome wrapped.
        """
        if inspect.isawaitable(error):
            pending = error

            async def _deferred() -> Result[Never, F]:
                return Failure(await pending)

            return AsyncResult(_Lazy(_deferred))
        return AsyncResult(_Settled(Failure(error)))

    @staticmethod
    def from_result(result: Result[U, F] | Awaitable[Result[U, F]]) -> AsyncResult[U, F]:
        """
        Wrap a ``Result``, an awaitable of one, or an existing ``AsyncResult``.

        An ``AsyncResult`` is returned as is.
        """
        if isinstance(result, AsyncResult):
            return cast("AsyncResult[U, F]", result)
        if isinstance(result, (Success, Failure)):
            return AsyncResult(_Settled(result))
        return AsyncResult(result)

    @staticmethod
    def lift(
        fn: Callable[P, Awaitable[Result[U, F]]],
    ) -> Callable[P, AsyncResult[U, F]]:
        """
        Turn a function returning an awaitable ``Result`` into one returning ``AsyncResult``.

        The call signature is preserved.

        Usage::

            @AsyncResult.lift
            async def load(path: str) -> Result[bytes, str]:
                ...

            load("a.txt").map(len)   # AsyncResult[int, str]
        """

        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> AsyncResult[U, F]:
            return AsyncResult(_Lazy(functools.partial(fn, *args, **kwargs)))

        return wrapper

    async def is_ok(self) -> bool:
        """Return ``True`` if this settles to ``Success``."""
        return (await self).is_ok()

    async def is_err(self) -> bool:
        """Return ``True`` if this settles to ``Failure``."""
        return (await self).is_err()

    def map(self, op: Callable[[T_co], U | Awaitable[U]]) -> AsyncResult[U, E_co]:
        """
        Apply *op* to the value once settled to ``Success``.

        A ``Failure`` passes through and *op* is not called.
        """

        async def _mapped() -> Result[U, E_co]:
            result = await self
            if isinstance(result, Success):
                return Success(await _resolve(op(result.value)))
            return result

        return AsyncResult(_Lazy(_mapped))

    def map_err(self, op: Callable[[E_co], F | Awaitable[F]]) -> AsyncResult[T_co, F]:
        """
        Apply *op* to the error once settled to ``Failure``.

        A ``Success`` passes through and *op* is not called.
        """

        async def _mapped() -> Result[T_co, F]:
            result = await self
            if isinstance(result, Failure):
                return Failure(await _resolve(op(result.error)))
            return result

        return AsyncResult(_Lazy(_mapped))

    def and_then(
        self,
        op: Callable[[T_co], Result[U, F] | Awaitable[Result[U, F]]],
    ) -> AsyncResult[U, E_co | F]:
        """
        Chain *op* once settled to ``Success``.

        *op* may return a ``Result``, an awaitable of one, or an ``AsyncResult``.
        A ``Failure`` passes through and *op* is not called.
        """

        async def _chained() -> Result[U, E_co | F]:
            result = await self
            if isinstance(result, Success):
                return await _resolve(op(result.value))
            return result

        return AsyncResult(_Lazy(_chained))

    def or_else(
        self,
        op: Callable[[E_co], Result[U, F] | Awaitable[Result[U, F]]],
    ) -> AsyncResult[T_co | U, F]:
        """
        Recover with *op* once settled to ``Failure``.

        *op* may return a ``Result``, an awaitable of one, or an ``AsyncResult``.
        A ``Success`` passes through and *op* is not called.
        """

        async def _recovered() -> Result[T_co | U, F]:
            result = await self
            if isinstance(result, Failure):
                return await _resolve(op(result.error))
            return result

        return AsyncResult(_Lazy(_recovered))

    def tap(self, op: Callable[[T_co], object]) -> AsyncResult[T_co, E_co]:
        """
        Call *op* with the value for its side effect once settled to ``Success``.

        An awaitable returned by *op* is awaited. Exceptions from *op* are
        logged and discarded; the result passes through unchanged.
        """

        async def _tapped() -> Result[T_co, E_co]:
            result = await self
            if isinstance(result, Success):
                try:
                    await _resolve(op(result.value))
                except Exception:
                    logger.debug("tap_callback_failed", branch="ok", exc_info=True)
            return result

        return AsyncResult(_Lazy(_tapped))

    def tap_err(self, op: Callable[[E_co], object]) -> AsyncResult[T_co, E_co]:
        """
        Call *op* with the error for its side effect once settled to ``Failure``.

        An awaitable returned by *op* is awaited. Exceptions from *op* are
        logged and discarded; the result passes through unchanged.
        """

        async def _tapped() -> Result[T_co, E_co]:
            result = await self
            if isinstance(result, Failure):
                try:
                    await _resolve(op(result.error))
                except Exception:
                    logger.debug("tap_callback_failed", branch="err", exc_info=True)
            return result

        return AsyncResult(_Lazy(_tapped))

    def attempt(
        self,
        op: Callable[[T_co], U | Awaitable[U]],
    ) -> AsyncResult[U, E_co | CapturedError]:
        """
        Apply *op* to the value once settled to ``Success``, capturing failures.

        Exceptions raised by *op* and exceptions raised while awaiting what it
        returns both become ``Failure(CapturedError)``. A ``Failure`` passes
        through and *op* is not called.
        """

        async def _attempted() -> Result[U, E_co | CapturedError]:
            result = await self
            if isinstance(result, Failure):
                return result
            try:
                value = await _resolve(op(result.value))
            except Exception as exc:
                return Failure(CapturedError(exc))
            return Success(value)

        return AsyncResult(_Lazy(_attempted))

    @overload
    async def unwrap(self) -> T_co: ...

    @overload
    async def unwrap(self, fallback: U) -> T_co | U: ...

    async def unwrap(self, fallback: Any = _MISSING) -> Any:
        """
        Return the value once settled, or *fallback* on ``Failure``.

        Raises:
            UnwrapError: If this settles to ``Failure`` and no fallback was supplied.

        """
        return (await self).unwrap(fallback)
