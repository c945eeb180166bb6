"""
Tests for the reader/writer lock.
"""
import threading

from repositories.locks import ReadWriteLock

TIMEOUT = 2.0


def _hold(lock_ctx, acquired: threading.Event, release: threading.Event):
    with lock_ctx():
        acquired.set()
        release.wait(TIMEOUT)


def test_two_readers_hold_the_lock_together():
    lock = ReadWriteLock()
    first_in = threading.Event()
    release = threading.Event()
    holder = threading.Thread(target=_hold, args=(lock.read, first_in, release))
    holder.start()
    assert first_in.wait(TIMEOUT)

    second_in = threading.Event()
    other = threading.Thread(target=_hold, args=(lock.read, second_in, release))
    other.start()
    try:
        assert second_in.wait(TIMEOUT)
    finally:
        release.set()
        holder.join(TIMEOUT)
        other.join(TIMEOUT)


def test_reader_blocks_while_writer_holds_the_lock():
    lock = ReadWriteLock()
    writer_in = threading.Event()
    release_writer = threading.Event()
    writer = threading.Thread(target=_hold, args=(lock.write, writer_in, release_writer))
    writer.start()
    assert writer_in.wait(TIMEOUT)

    reader_in = threading.Event()
    release_reader = threading.Event()
    reader = threading.Thread(target=_hold, args=(lock.read, reader_in, release_reader))
    reader.start()
    try:
        assert not reader_in.wait(0.2)
        release_writer.set()
        assert reader_in.wait(TIMEOUT)
    finally:
        release_writer.set()
        release_reader.set()
        writer.join(TIMEOUT)
        reader.join(TIMEOUT)


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    first_reader_in = threading.Event()
    release_first = threading.Event()
    first_reader = threading.Thread(target=_hold, args=(lock.read, first_reader_in, release_first))
    first_reader.start()
    assert first_reader_in.wait(TIMEOUT)

    writer_in = threading.Event()
    release_writer = threading.Event()
    writer = threading.Thread(target=_hold, args=(lock.write, writer_in, release_writer))
    writer.start()
    # writer is queued behind the first reader
    assert not writer_in.wait(0.2)

    late_reader_in = threading.Event()
    release_late = threading.Event()
    late_reader = threading.Thread(target=_hold, args=(lock.read, late_reader_in, release_late))
    late_reader.start()
    try:
        assert not late_reader_in.wait(0.2)

        release_first.set()
        assert writer_in.wait(TIMEOUT)
        assert not late_reader_in.is_set()

        release_writer.set()
        assert late_reader_in.wait(TIMEOUT)
    finally:
        release_first.set()
        release_writer.set()
        release_late.set()
        for t in (first_reader, writer, late_reader):
            t.join(TIMEOUT)
