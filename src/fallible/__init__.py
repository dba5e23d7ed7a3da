"""Success/failure containers for sync and async code."""

from .async_result import AsyncResult
from .attempt import attempt, attempt_awaitable, attempt_initiator
from .ensure import ensure
from .errors import CapturedError, NullError, RejectionError, ResultError
from .result import (
    Failure,
    Result,
    Success,
    UnwrapError,
    failure,
    is_err,
    is_ok,
    success,
)

__all__ = [
    "AsyncResult",
    "CapturedError",
    "Failure",
    "NullError",
    "RejectionError",
    "Result",
    "ResultError",
    "Success",
    "UnwrapError",
    "attempt",
    "attempt_awaitable",
    "attempt_initiator",
    "ensure",
    "failure",
    "is_err",
    "is_ok",
    "success",
]
