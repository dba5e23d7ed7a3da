"""Error values produced by the adapters and by ``attempt``."""

from __future__ import annotations

from typing import ClassVar

__all__ = ["CapturedError", "NullError", "RejectionError", "ResultError"]


class ResultError(Exception):

    """
    Base class for errors that ``fallible`` places inside a ``Failure``.

    Each subclass fixes its message in the ``message`` class attribute. The
    original raised or rejected value, if any, is kept unmodified in
    ``.cause``; when it is an exception it is also chained as ``__cause__``.
    """

    message: ClassVar[str] = "Result error"

    def __init__(self, cause: object = None) -> None:
        super().__init__(self.message)
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause


class CapturedError(ResultError):

    """An exception or rejection captured by ``attempt``."""

    message: ClassVar[str] = "Unknown error occurred"


class NullError(ResultError):

    """Raised into a ``Failure`` by ``ensure`` when the value is ``None``."""

    message: ClassVar[str] = "Value is null or undefined"


class RejectionError(ResultError):

    """The awaitable passed to ``ensure`` raised instead of producing a value."""

    message: ClassVar[str] = "Promise rejected"
