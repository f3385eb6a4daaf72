"""Shared pieces for console view controllers."""

from __future__ import annotations

import inspect
from enum import Enum
from typing import Awaitable, Callable, Union

Confirm = Callable[[str], Union[bool, Awaitable[bool]]]


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"
    NOT_FOUND = "not_found"


class RequestSequence:
    """Monotonic ticket per issued request.

    A response is applied only if its ticket is still the latest one issued
    by the same view instance; anything older is stale.
    """

    def __init__(self) -> None:
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, ticket: int) -> bool:
        return ticket == self._latest

    def invalidate(self) -> None:
        """Make every in-flight request stale (view unmounted)."""
        self._latest += 1


async def confirmed(confirm: Confirm, prompt: str) -> bool:
    answer = confirm(prompt)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)
