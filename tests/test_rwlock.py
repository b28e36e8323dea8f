"""Tests for RWLock.

Tests verify:
- Concurrent readers
- Exclusive writers
- Writer preference over newly arriving readers
- Reentrant reads
- Upgrade, downgrade and nested-write rejection
- Timeouts
"""

from __future__ import annotations

import threading
import time

import pytest

from langprovider.runtime.rwlock import RWLock


class TestRWLockBasics:
    """Single-threaded behaviour."""

    def test_read_and_release(self) -> None:
        """Reader count rises inside the block and drops after."""
        lock = RWLock()
        with lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_write_and_release(self) -> None:
        """writer_active reflects the write block."""
        lock = RWLock()
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_reentrant_read(self) -> None:
        """The same thread may nest read blocks."""
        lock = RWLock()
        with lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_upgrade_rejected(self) -> None:
        """Acquiring write while reading raises instead of deadlocking."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="upgrade"):
            with lock.write():
                pass
        assert lock.reader_count == 0

    def test_downgrade_rejected(self) -> None:
        """Acquiring read while writing raises."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="write lock"):
            with lock.read():
                pass
        assert not lock.writer_active

    def test_nested_write_rejected(self) -> None:
        """Write locks are not reentrant."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="already holding"):
            with lock.write():
                pass

    def test_negative_timeout_rejected(self) -> None:
        """Timeouts must be non-negative."""
        lock = RWLock()
        with pytest.raises(ValueError, match="non-negative"), lock.read(timeout=-1):
            pass

    def test_lock_released_on_exception(self) -> None:
        """An exception inside the block still releases the lock."""
        lock = RWLock()
        with pytest.raises(KeyError), lock.write():
            raise KeyError("boom")
        assert not lock.writer_active


class TestRWLockConcurrency:
    """Multi-threaded behaviour."""

    def test_readers_share(self) -> None:
        """Two readers hold the lock at the same time."""
        lock = RWLock()
        both_inside = threading.Barrier(2, timeout=5)

        def reader() -> None:
            with lock.read():
                both_inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)
        assert not both_inside.broken

    def test_writer_excludes_reader(self) -> None:
        """A reader times out while another thread writes."""
        lock = RWLock()
        writing = threading.Event()
        release = threading.Event()

        def writer() -> None:
            with lock.write():
                writing.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=writer)
        thread.start()
        assert writing.wait(timeout=5)
        try:
            with pytest.raises(TimeoutError), lock.read(timeout=0.05):
                pass
        finally:
            release.set()
            thread.join(timeout=5)

    def test_write_timeout_while_read_held(self) -> None:
        """A writer times out while another thread reads."""
        lock = RWLock()
        reading = threading.Event()
        release = threading.Event()

        def reader() -> None:
            with lock.read():
                reading.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=reader)
        thread.start()
        assert reading.wait(timeout=5)
        try:
            with pytest.raises(TimeoutError), lock.write(timeout=0.05):
                pass
        finally:
            release.set()
            thread.join(timeout=5)
        # A timed-out writer must not block later readers
        with lock.read(timeout=1):
            pass

    def test_writer_preferred_over_new_readers(self) -> None:
        """A waiting writer runs before readers that arrive after it."""
        lock = RWLock()
        order: list[str] = []
        first_reader_in = threading.Event()
        release_first = threading.Event()

        def first_reader() -> None:
            with lock.read():
                first_reader_in.set()
                release_first.wait(timeout=5)

        def writer() -> None:
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            with lock.read():
                order.append("reader")

        t1 = threading.Thread(target=first_reader)
        t1.start()
        assert first_reader_in.wait(timeout=5)

        t2 = threading.Thread(target=writer)
        t2.start()
        deadline = time.monotonic() + 5
        while lock._waiting_writers == 0 and time.monotonic() < deadline:  # noqa: SLF001
            time.sleep(0.001)

        t3 = threading.Thread(target=late_reader)
        t3.start()
        time.sleep(0.05)
        release_first.set()

        for thread in (t1, t2, t3):
            thread.join(timeout=5)
        assert order == ["writer", "reader"]
