"""A success/failure container with chaining combinators."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import (
    TYPE_CHECKING,
    Any,
    Final,
    Generic,
    Literal,
    Never,
    NoReturn,
    Self,
    TypeAlias,
    TypeVar,
    overload,
)

from ._logging import get_logger
from .errors import CapturedError

if sys.version_info >= (3, 13):
    from typing import TypeIs
else:  # pragma: no cover
    from typing_extensions import TypeIs

if TYPE_CHECKING:
    from .async_result import AsyncResult

T = TypeVar("T")
E = TypeVar("E")
T_co = TypeVar("T_co", covariant=True)  # Success type
E_co = TypeVar("E_co", covariant=True)  # Error type
U = TypeVar("U")
F = TypeVar("F")

logger = get_logger(__name__)


class _Missing:

    """Marker for an omitted ``unwrap`` fallback, so ``None`` stays a valid one."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


_MISSING: Final = _Missing()


class Success(Generic[T_co]):

    """A ``Success`` value, storing arbitrary data for the return value."""

    __match_args__ = ("value",)
    __slots__ = ("_value",)

    def __init__(self, value: T_co) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Success) and self._value == other._value

    def __hash__(self) -> int:
        return hash((True, self._value))

    @property
    def value(self) -> T_co:
        """The contained value."""
        return self._value

    def is_ok(self) -> Literal[True]:
        """Return ``True`` because this is a ``Success`` value."""
        return True

    def is_err(self) -> Literal[False]:
        """Return ``False`` because this is a ``Success`` value."""
        return False

    def and_then(self, op: Callable[[T_co], Result[U, F]]) -> Result[U, F]:
        """
        Call *op* with the contained value and return its result.

        This is how a chain continues down the happy path.
        """
        return op(self._value)

    def or_else(self, _op: object) -> Self:
        """
        Call *op* if the result is ``Failure``, otherwise return *self*.

        Since this is ``Success``, *op* is never called.
        """
        return self

    def map(self, op: Callable[[T_co], U]) -> Success[U]:
        """
        Apply *op* to the contained value.

        Map a ``Result[T, E]`` to ``Result[U, E]``, leaving a ``Failure`` untouched.
        """
        return Success(op(self._value))

    def map_err(self, _op: object) -> Self:
        """
        Apply *op* to a contained error, leaving ``Success`` untouched.

        Map a ``Result[T, E]`` to ``Result[T, F]``.
        """
        return self

    def tap(self, op: Callable[[T_co], object]) -> Self:
        """
        Call *op* with the contained value for its side effect.

        Any ``Exception`` raised by *op* is logged and discarded; the original
        result is returned unchanged.
        """
        try:
            op(self._value)
        except Exception:
            logger.debug("tap_callback_failed", branch="ok", exc_info=True)
        return self

    def tap_err(self, _op: object) -> Self:
        """
        Call *op* with the contained error if ``Failure``.

        Since this is ``Success``, *op* is not called.
        """
        return self

    def attempt(self, op: Callable[[T_co], U]) -> Result[U, CapturedError]:
        """
        Apply *op* to the contained value, capturing anything it raises.

        Returns ``Success(op(value))``, or ``Failure(CapturedError)`` whose
        ``cause`` is the raised exception.
        """
        try:
            return Success(op(self._value))
        except Exception as exc:
            return Failure(CapturedError(exc))

    def unwrap(self, _fallback: object = _MISSING) -> T_co:
        """
        Return the contained value.

        Because this is a ``Success``, the fallback is ignored and this never raises.
        """
        return self._value

    def to_async(self) -> AsyncResult[T_co, Never]:
        """Return an ``AsyncResult`` already settled to this result."""
        from .async_result import AsyncResult

        return AsyncResult.from_result(self)


class Failure(Generic[E_co]):

    """A ``Failure`` value signifying failure, storing arbitrary data for the error."""

    __match_args__ = ("error",)
    __slots__ = ("_error",)

    def __init__(self, error: E_co) -> None:
        self._error = error

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Failure) and self._error == other._error

    def __hash__(self) -> int:
        return hash((False, self._error))

    @property
    def error(self) -> E_co:
        """The contained error."""
        return self._error

    def is_ok(self) -> Literal[False]:
        """Return ``False`` because this is a ``Failure`` value."""
        return False

    def is_err(self) -> Literal[True]:
        """Return ``True`` because this is a ``Failure`` value."""
        return True

    def and_then(self, _op: object) -> Self:
        """
        Call *op* if the result is ``Success``, otherwise return *self*.

        Since this is ``Failure``, *op* is never called.
        """
        return self

    def or_else(self, op: Callable[[E_co], Result[U, F]]) -> Result[U, F]:
        """
        Call *op* with the contained error and return its result.

        This is how a chain recovers from, or continues down, the error path.
        """
        return op(self._error)

    def map(self, _op: object) -> Self:
        """
        Apply *op* to a contained value.

        Map a ``Result[T, E]`` to ``Result[U, E]``, leaving a ``Failure`` untouched.
        """
        return self

    def map_err(self, op: Callable[[E_co], F]) -> Failure[F]:
        """
        Apply *op* to the contained error, leaving ``Success`` untouched.

        Map a ``Result[T, E]`` to ``Result[T, F]``.
        """
        return Failure(op(self._error))

    def tap(self, _op: object) -> Self:
        """
        Call *op* with the contained value if ``Success``.

        Since this is ``Failure``, *op* is not called.
        """
        return self

    def tap_err(self, op: Callable[[E_co], object]) -> Self:
        """
        Call *op* with the contained error for its side effect.

        Any ``Exception`` raised by *op* is logged and discarded; the original
        result is returned unchanged.
        """
        try:
            op(self._error)
        except Exception:
            logger.debug("tap_callback_failed", branch="err", exc_info=True)
        return self

    def attempt(self, _op: object) -> Self:
        """
        Apply *op* to a contained value, capturing anything it raises.

        Since this is ``Failure``, *op* is not called.
        """
        return self

    @overload
    def unwrap(self) -> NoReturn: ...

    @overload
    def unwrap(self, fallback: U) -> U: ...

    def unwrap(self, fallback: object = _MISSING) -> object:
        """
        Return the fallback in place of the missing value.

        Raises:
            UnwrapError: If no fallback was supplied, with a message including
                the ``Failure`` content.

        """
        if fallback is not _MISSING:
            return fallback
        exc = UnwrapError(
            self,
            f"Called `Result.unwrap()` on a `Failure` value: {self._error!r}",
        )
        if isinstance(self._error, BaseException):
            raise exc from self._error
        raise exc

    def to_async(self) -> AsyncResult[Never, E_co]:
        """Return an ``AsyncResult`` already settled to this result."""
        from .async_result import AsyncResult

        return AsyncResult.from_result(self)


Result: TypeAlias = Success[T_co] | Failure[E_co]
"""
Either ``Success[T]`` or ``Failure[E]``.

The union is closed: these two classes are the only variants, matched with
``isinstance`` or a ``match`` statement.
"""


class UnwrapError(Exception):

    """
    Exception raised from ``.unwrap()`` on a ``Failure`` without a fallback.

    The original ``Result`` can be accessed via the ``.result`` attribute, but
    this is not intended for regular use, as type information is lost.
    """

    _result: Result[object, object]

    def __init__(self, result: Result[object, object], message: str) -> None:
        self._result = result
        super().__init__(message)

    @property
    def result(self) -> Result[Any, Any]:
        """Return the original result."""
        return self._result


def success(value: T) -> Success[T]:
    """Wrap *value* in a ``Success``."""
    return Success(value)


def failure(error: E) -> Failure[E]:
    """Wrap *error* in a ``Failure``."""
    return Failure(error)


def is_ok(result: Result[T, E]) -> TypeIs[Success[T]]:
    """
    Check whether *result* is ``Success`` (typeguard).

    Usage::

        r: Result[int, str] = get_a_result()
        if is_ok(r):
            r   # r is of type Success[int]
        elif is_err(r):
            r   # r is of type Failure[str]
    """
    return result.is_ok()


def is_err(result: Result[T, E]) -> TypeIs[Failure[E]]:
    """
    Check whether *result* is ``Failure`` (typeguard).

    Usage::

        r: Result[int, str] = get_a_result()
        if is_ok(r):
            r   # r is of type Success[int]
        elif is_err(r):
            r   # r is of type Failure[str]
    """
    return result.is_err()
