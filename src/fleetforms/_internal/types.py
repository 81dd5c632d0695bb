"""Shared type aliases used across fleetforms modules."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, TypeAlias

# Field name to current (usually string) value
FormValues: TypeAlias = Mapping[str, Any]

# Receives the current values; may be sync or async
SubmitHandler: TypeAlias = Callable[[Any], Awaitable[None] | None]


class SubmitEvent(Protocol):
    """The UI event that triggered a submit (a form's submit event)."""

    def prevent_default(self) -> None: ...
