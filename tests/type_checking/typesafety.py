"""Type-safety examples validated by mypy.

This file is never executed at runtime.  The type checker validates it
statically to ensure the fallible public API is correctly typed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fallible import (
    AsyncResult,
    CapturedError,
    Failure,
    NullError,
    RejectionError,
    Result,
    Success,
    UnwrapError,
    attempt,
    attempt_initiator,
    ensure,
    failure,
    is_err,
    is_ok,
    success,
)

# ---------------------------------------------------------------------------
# Helpers - use function returns so checkers don't over-narrow
# ---------------------------------------------------------------------------


def make_success() -> Result[int, str]:
    return Success(1)


# ---------------------------------------------------------------------------
# 1. Construction
# ---------------------------------------------------------------------------

ok: Success[int] = success(42)
err: Failure[str] = failure("oops")
res: Result[int, str] = make_success()

# ---------------------------------------------------------------------------
# 2. isinstance / type guard narrowing
# ---------------------------------------------------------------------------

res2 = make_success()
if isinstance(res2, Success):
    _isinstance_ok: int = res2.value
elif isinstance(res2, Failure):
    _isinstance_err: str = res2.error

res3 = make_success()
if is_ok(res3):
    _guard_ok: Success[int] = res3
if is_err(res3):
    _guard_err: Failure[str] = res3

# ---------------------------------------------------------------------------
# 3. Pattern matching
# ---------------------------------------------------------------------------

res4 = make_success()
match res4:
    case Success(v):
        _match_ok: int = v
    case Failure(e):
        _match_err: str = e

# ---------------------------------------------------------------------------
# 4. Covariance
# ---------------------------------------------------------------------------

ok_int: Success[int] = Success(1)
ok_float: Success[float] = ok_int

res_narrow: Result[int, TypeError] = Success(1)
res_wide: Result[float, Exception] = res_narrow

async_narrow: AsyncResult[int, TypeError] = AsyncResult.success(1)
async_wide: AsyncResult[float, Exception] = async_narrow

# ---------------------------------------------------------------------------
# 5. Combinator return types
# ---------------------------------------------------------------------------


def _to_str(x: int) -> Result[str, str]:
    return Success(str(x))


def _recover(e: str) -> Result[int, int]:
    return Success(len(e))


_map: Success[str] = Success(42).map(str)
_map_err_noop: Success[int] = Success(42).map_err(str)
_map_err: Failure[int] = Failure("bad").map_err(len)
_and_then: Result[str, str] = Success(42).and_then(_to_str)
_and_then_err: Failure[str] = Failure("e").and_then(_to_str)
_or_else: Result[int, int] = Failure("e").or_else(_recover)
_tap: Success[int] = Success(42).tap(print)
_tap_err: Failure[str] = Failure("e").tap_err(print)
_attempt: Result[int, CapturedError] = Success("1").attempt(int)

# ---------------------------------------------------------------------------
# 6. Unwrapping
# ---------------------------------------------------------------------------

_unwrap: int = ok.unwrap()
_unwrap_fallback: int | str = make_success().unwrap("fallback")
_unwrap_err_fallback: str = err.unwrap("fallback")

_ue = UnwrapError(Success(1), "test")
_ue_result: Result[object, object] = _ue.result

# ---------------------------------------------------------------------------
# 7. Adapters
# ---------------------------------------------------------------------------


def _parse() -> int:
    return 1


async def _fetch() -> bytes:
    return b""


def _start(resolve: Callable[[str], None], reject: Callable[[Any], None]) -> None:
    resolve("done")


_attempt_sync: Result[int, CapturedError] = attempt(_parse)
_attempt_async: AsyncResult[bytes, CapturedError] = attempt(_fetch)
_attempt_awaitable: AsyncResult[bytes, CapturedError] = attempt(_fetch())
_attempt_initiator: AsyncResult[str, CapturedError] = attempt_initiator(_start)

_ensure_sync: Result[str, NullError] = ensure({"a": "b"}.get("a"))


async def _maybe_name() -> str | None:
    return None


_ensure_async: AsyncResult[str, NullError | RejectionError] = ensure(_maybe_name())

# ---------------------------------------------------------------------------
# 8. AsyncResult chains
# ---------------------------------------------------------------------------


async def _async_examples() -> None:
    async def to_str(x: int) -> str:
        return str(x)

    async def validate(x: int) -> Result[str, str]:
        return Success(str(x))

    base: AsyncResult[int, str] = AsyncResult.from_result(make_success())

    _m: Result[str, str] = await base.map(to_str)
    _m_sync: Result[str, str] = await base.map(str)
    _me: Result[int, int] = await base.map_err(len)
    _at: Result[str, str] = await base.and_then(validate)
    _at_sync: Result[str, str] = await base.and_then(_to_str)
    _t: Result[int, str] = await base.tap(print)
    _a: Result[int, str | CapturedError] = await base.attempt(to_str).map(int)
    _u: int = await base.unwrap()
    _uf: int | None = await base.unwrap(None)
    _ok: bool = await base.is_ok()

    @AsyncResult.lift
    async def lifted(x: int) -> Result[int, str]:
        return Success(x)

    _lifted: AsyncResult[int, str] = lifted(1)
