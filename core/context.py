"""
Cancellation and deadline carrying context passed to Module.init.
"""

import threading
import time
from typing import Any, Dict, List, Optional

from core.errors import Cancelled


class Context:
    """A cancellable context with an optional deadline and scoped values.

    Contexts form a tree: cancelling a parent cancels every child derived
    from it. Deadlines only ever tighten when deriving a child.
    """

    def __init__(self, parent: Optional["Context"] = None,
                 deadline: Optional[float] = None,
                 values: Optional[Dict[str, Any]] = None):
        """
        Initialize a context.

        Args:
            parent: Context this one derives from
            deadline: Absolute ``time.monotonic()`` timestamp, or None
            values: Values scoped to this context
        """
        self._parent = parent
        self._values = dict(values or {})
        self._event = threading.Event()
        self._reason: Optional[str] = None
        self._children: List["Context"] = []
        self._lock = threading.Lock()

        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline

        if parent is not None:
            parent._add_child(self)

    @classmethod
    def background(cls) -> "Context":
        """Return a fresh root context that is never cancelled on its own."""
        return cls()

    def with_cancel(self) -> "Context":
        return Context(parent=self)

    def with_deadline(self, deadline: float) -> "Context":
        return Context(parent=self, deadline=deadline)

    def with_timeout(self, seconds: float) -> "Context":
        return Context(parent=self, deadline=time.monotonic() + seconds)

    def with_value(self, key: str, value: Any) -> "Context":
        return Context(parent=self, values={key: value})

    def value(self, key: str) -> Optional[Any]:
        """Look up a value, walking up through the parents."""
        ctx: Optional[Context] = self
        while ctx is not None:
            if key in ctx._values:
                return ctx._values[key]
            ctx = ctx._parent
        return None

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self, reason: str = "context canceled") -> None:
        """Cancel this context and all of its children, then detach it from its parent."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children = self._children
            self._children = []
        for child in children:
            child.cancel(reason)
        if self._parent is not None:
            self._parent._remove_child(self)

    @property
    def cancelled(self) -> bool:
        return self.err() is not None

    def done(self) -> bool:
        return self.cancelled

    def err(self) -> Optional[str]:
        """Return why the context is done, or None while it is still live."""
        if self._event.is_set():
            return self._reason
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return "context deadline exceeded"
        return None

    def check(self) -> None:
        """Raise Cancelled if the context is done."""
        reason = self.err()
        if reason is not None:
            raise Cancelled(reason)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled, the deadline passes or ``timeout`` elapses."""
        remaining = self.remaining()
        if remaining is not None:
            timeout = remaining if timeout is None else min(timeout, remaining)
        self._event.wait(timeout)
        return self.done()

    def _add_child(self, child: "Context") -> None:
        with self._lock:
            if not self._event.is_set():
                self._children.append(child)
                return
            reason = self._reason
        child.cancel(reason or "context canceled")

    def _remove_child(self, child: "Context") -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)
