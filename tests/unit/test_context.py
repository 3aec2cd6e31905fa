"""Tests for request contexts."""

from __future__ import annotations

import threading
import time

from scalr.context import Context
from scalr.errors import ContextCanceled, DeadlineExceeded


class TestContext:
    def test_background_is_never_done(self):
        ctx = Context.background()
        assert not ctx.done()
        assert ctx.err() is None
        assert ctx.remaining() is None

    def test_cancel_propagates_to_children(self):
        parent = Context.background()
        child = parent.with_cancel()
        grandchild = child.with_timeout(60)

        parent.cancel()

        assert isinstance(child.err(), ContextCanceled)
        assert isinstance(grandchild.err(), ContextCanceled)

    def test_cancel_child_leaves_parent_live(self):
        parent = Context.background()
        child = parent.with_cancel()
        child.cancel()
        assert child.done()
        assert not parent.done()

    def test_child_of_done_parent_is_done(self):
        parent = Context.background()
        parent.cancel()
        assert parent.with_cancel().done()

    def test_deadline(self):
        ctx = Context.background().with_timeout(0.01)
        time.sleep(0.02)
        assert ctx.done()
        assert isinstance(ctx.err(), DeadlineExceeded)
        assert isinstance(ctx.err(), TimeoutError)

    def test_child_deadline_capped_by_parent(self):
        parent = Context.background().with_timeout(1)
        child = parent.with_timeout(60)
        assert child.deadline == parent.deadline

    def test_wait_is_interrupted_by_cancel(self):
        ctx = Context.background()
        threading.Timer(0.05, ctx.cancel).start()

        started = time.monotonic()
        assert ctx.wait(5) is True
        assert time.monotonic() - started < 2

    def test_wait_times_out(self):
        assert Context.background().wait(0.01) is False

    def test_release_detaches_from_parent(self):
        parent = Context.background()
        children = [parent.with_cancel(), parent.with_timeout(60)]
        for child in children:
            child.release()

        assert parent._children == []
        parent.cancel()
        assert not any(child.done() for child in children)

    def test_release_is_idempotent(self):
        child = Context.background().with_cancel()
        child.release()
        child.release()
        assert not child.done()
