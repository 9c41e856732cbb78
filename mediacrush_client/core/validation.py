"""Argument checks run before any request is issued.

WHY: Sending a request for an empty hash or a missing URL only wastes a
round trip to get an unhelpful server error. Failing fast names the
offending parameter instead.

RULES:
- None, empty/whitespace-only strings, empty bytes and empty sequences
  are rejected
- The checked value is returned unchanged so calls can be inlined
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from mediacrush_client.api.errors import InvalidArgumentError

T = TypeVar("T")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Sequence, bytearray)):
        return len(value) == 0
    return False


def require_non_null(value: T | None, name: str) -> T:
    """Return value, or raise InvalidArgumentError naming the parameter."""
    if _is_empty(value):
        raise InvalidArgumentError(name)
    return value  # type: ignore[return-value]


def require_all_non_null(
    values: Sequence[T] | None,
    name: str,
    member_type: type | None = None,
) -> Sequence[T]:
    """Like require_non_null, but also rejects empty members.

    When member_type is given, every member must be an instance of it.
    """
    require_non_null(values, name)
    for index, value in enumerate(values):  # type: ignore[arg-type]
        if _is_empty(value):
            raise InvalidArgumentError(
                name, f"{name}[{index}] must not be null or empty"
            )
        if member_type is not None and not isinstance(value, member_type):
            raise InvalidArgumentError(
                name,
                f"{name}[{index}] must be {member_type.__name__}, "
                f"got {type(value).__name__}",
            )
    return values  # type: ignore[return-value]
