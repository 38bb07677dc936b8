"""
Formflow Hooks
==============

Synchronous named hooks with priorities.

Handlers run in priority order on the calling thread. A handler
that raises is logged and skipped; the remaining handlers still
run and the error is returned in the results list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, List, TypeVar

from formflow.utils.logger import get_logger

logger = get_logger("formflow.hooks")

T = TypeVar("T")
HookCallback = Callable[..., Any]


class HookPriority(Enum):
    """Hook execution priority."""

    HIGHEST = 0
    HIGH = 25
    NORMAL = 50
    LOW = 75
    LOWEST = 100


@dataclass
class HookHandler:
    """
    Registered hook handler.

    Attributes:
        callback: Handler function
        priority: Execution priority
        once: Execute only once
    """

    callback: HookCallback
    priority: int = HookPriority.NORMAL.value
    once: bool = False
    _executed: bool = field(default=False, repr=False)

    def execute(self, *args: Any, **kwargs: Any) -> Any:
        """Execute the handler."""
        if self.once and self._executed:
            return None

        self._executed = True
        return self.callback(*args, **kwargs)


class Hook(Generic[T]):
    """
    Named hook.

    Example:
        on_finish: Hook[dict] = Hook("finish")

        @on_finish.handler()
        def save(values):
            store(values)

        on_finish.trigger({"email": "a@b.c"})
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description
        self._handlers: List[HookHandler] = []

    def add(
        self,
        callback: HookCallback,
        priority: int = HookPriority.NORMAL.value,
        once: bool = False,
    ) -> "Hook[T]":
        """
        Add handler to hook.

        Args:
            callback: Handler function
            priority: Execution priority
            once: Execute only once

        Returns:
            Self for chaining
        """
        self._handlers.append(
            HookHandler(callback=callback, priority=priority, once=once)
        )
        # sort is stable, equal priorities keep insertion order
        self._handlers.sort(key=lambda h: h.priority)
        return self

    def handler(
        self,
        priority: int = HookPriority.NORMAL.value,
        once: bool = False,
    ) -> Callable[[HookCallback], HookCallback]:
        """Decorator to add handler."""
        def decorator(func: HookCallback) -> HookCallback:
            self.add(func, priority, once)
            return func
        return decorator

    def remove(self, callback: HookCallback) -> bool:
        """
        Remove handler from hook.

        Returns:
            True if removed
        """
        for handler in self._handlers:
            if handler.callback == callback:
                self._handlers.remove(handler)
                return True
        return False

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()

    def trigger(self, *args: Any, **kwargs: Any) -> List[Any]:
        """
        Run every handler.

        Returns:
            Handler return values, or the exception a handler raised
        """
        results: List[Any] = []

        for handler in list(self._handlers):
            try:
                results.append(handler.execute(*args, **kwargs))
            except Exception as e:
                logger.error("Hook handler failed", exception=e, hook=self.name)
                results.append(e)

        self._handlers = [
            h for h in self._handlers
            if not (h.once and h._executed)
        ]

        return results

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"<Hook {self.name!r} handlers={len(self._handlers)}>"

