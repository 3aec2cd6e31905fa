"""Cooperative cancellation and deadlines for blocking API calls.

Every client operation accepts an optional ``ctx``. A context is done once it
is cancelled, its deadline passes, or its parent is done. Cancellation is
observed between retry attempts, before a request is sent, and through the
per-request timeout derived from the deadline.
"""

from __future__ import annotations

import threading
import time

from scalr.errors import ContextCanceled, DeadlineExceeded, ScalrError


class Context:
    """Cancellation token backed by ``threading.Event`` with an optional deadline."""

    def __init__(self, parent: Context | None = None, deadline: float | None = None):
        self._parent = parent
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._children: list[Context] = []
        self._err: ScalrError | None = None

        if parent is not None and parent._deadline is not None:
            deadline = parent._deadline if deadline is None else min(deadline, parent._deadline)
        self._deadline = deadline

        if parent is not None:
            parent._attach(self)

    @classmethod
    def background(cls) -> Context:
        """A context that is never cancelled and has no deadline."""
        return cls()

    def with_cancel(self) -> Context:
        """Derive a child that can be cancelled independently of this one."""
        return Context(parent=self)

    def with_timeout(self, seconds: float) -> Context:
        """Derive a child whose deadline is *seconds* from now."""
        return Context(parent=self, deadline=time.monotonic() + seconds)

    def _attach(self, child: Context) -> None:
        with self._lock:
            if self._err is None:
                self._children.append(child)
                return
            err = self._err
        child._finish(err)

    def _finish(self, err: ScalrError) -> None:
        with self._lock:
            if self._err is not None:
                return
            self._err = err
            children, self._children = self._children, []
        self._event.set()
        for child in children:
            child._finish(err)

    def cancel(self) -> None:
        """Cancel this context and every context derived from it."""
        self._finish(ContextCanceled())

    def release(self) -> None:
        """Detach from the parent once this context is no longer needed.

        A released context no longer observes its parent's cancellation.
        """
        parent, self._parent = self._parent, None
        if parent is None:
            return
        with parent._lock:
            if self in parent._children:
                parent._children.remove(self)

    @property
    def deadline(self) -> float | None:
        """Monotonic deadline, or None."""
        return self._deadline

    def remaining(self) -> float | None:
        """Seconds left until the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def done(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._finish(DeadlineExceeded())
            return True
        return False

    def err(self) -> ScalrError | None:
        """The reason this context is done, or None while it is live."""
        if not self.done():
            return None
        return self._err

    def wait(self, timeout: float) -> bool:
        """Sleep up to *timeout* seconds; return True early if the context is done."""
        remaining = self.remaining()
        if remaining is not None and remaining < timeout:
            self._event.wait(remaining)
            return self.done()
        return self._event.wait(timeout) or self.done()
