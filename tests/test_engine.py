"""Tests for the serial, future-based color engine."""

import threading
import time

import pytest

from primary_color import ColorEngine, ColorOptions, NoColorFoundError
from primary_color.core import BRIGHT_OPTIONS, DARK_OPTIONS, process_image

TIMEOUT = 10


@pytest.fixture
def engine():
    engine = ColorEngine(name="test-engine")
    yield engine
    engine.shutdown(wait=True)


def test_future_matches_blocking_pipeline(engine, clustered_image) -> None:
    options = ColorOptions.ONLY_DISTINCT_COLORS | ColorOptions.AVOID_WHITE

    future = engine.extract_colors(clustered_image, options, ["#14141a"])

    assert future.result(TIMEOUT) == process_image(clustered_image, options, ["#14141a"])


def test_convenience_operations(engine, clustered_image) -> None:
    bright = engine.extract_bright_colors(clustered_image).result(TIMEOUT)
    dark = engine.extract_dark_colors(clustered_image).result(TIMEOUT)
    main = engine.extract_main_color(clustered_image).result(TIMEOUT)

    assert bright == process_image(clustered_image, BRIGHT_OPTIONS)
    assert dark == process_image(clustered_image, DARK_OPTIONS)
    assert main == process_image(clustered_image)[0]


def test_main_color_error_is_raised_from_future(engine, make_buffer) -> None:
    called = []

    future = engine.extract_main_color(make_buffer(((0, 0, 0), 16)), completion=called.append)

    with pytest.raises(NoColorFoundError):
        future.result(TIMEOUT)
    assert called == []


def test_completion_runs_with_result(engine, make_buffer) -> None:
    done = threading.Event()
    received = []

    def completion(colors):
        received.append(colors)
        done.set()

    future = engine.extract_colors(make_buffer(((204, 204, 204), 9)), completion=completion)

    assert done.wait(TIMEOUT)
    assert received == [future.result()]


def test_completion_is_handed_to_callback_executor(engine, make_buffer) -> None:
    scheduled = []
    ready = threading.Event()
    received = []

    def callback_executor(fn):
        scheduled.append(fn)
        ready.set()

    engine.extract_colors(
        make_buffer(((255, 0, 0), 4)),
        completion=lambda colors: received.append((threading.current_thread(), colors)),
        callback_executor=callback_executor,
    )

    assert ready.wait(TIMEOUT)
    assert received == []

    scheduled[0]()

    thread, colors = received[0]
    assert thread is threading.current_thread()
    assert colors == [(1.0, 0.0, 0.0)]


def test_requests_run_serially_in_order(engine) -> None:
    events = []

    def task(n):
        events.append(("start", n))
        time.sleep(0.01)
        events.append(("end", n))
        return n

    futures = [engine._submit(task, n) for n in range(5)]

    assert [f.result(TIMEOUT) for f in futures] == list(range(5))
    assert events == [e for n in range(5) for e in (("start", n), ("end", n))]


def test_requests_share_one_worker_thread(engine) -> None:
    futures = [engine._submit(lambda: threading.current_thread().name) for _ in range(4)]

    names = {f.result(TIMEOUT) for f in futures}
    assert len(names) == 1
    assert names.pop().startswith("test-engine")


def test_engines_run_independently(make_buffer) -> None:
    release = threading.Event()

    with ColorEngine() as blocked, ColorEngine() as free:
        blocker = blocked._submit(release.wait, TIMEOUT)
        queued = blocked.extract_colors(make_buffer(((255, 255, 255), 1)))

        result = free.extract_colors(make_buffer(((255, 255, 255), 1))).result(TIMEOUT)

        assert result == [(1.0, 1.0, 1.0)]
        assert not queued.done()
        release.set()
        assert blocker.result(TIMEOUT) is True
        assert queued.result(TIMEOUT) == result


def test_submitted_requests_cannot_be_cancelled(engine, make_buffer) -> None:
    release = threading.Event()
    engine._submit(release.wait, TIMEOUT)

    future = engine.extract_colors(make_buffer(((255, 255, 255), 1)))

    assert not future.cancel()
    release.set()
    assert future.result(TIMEOUT) == [(1.0, 1.0, 1.0)]


def test_buffer_is_copied_at_submission(engine) -> None:
    release = threading.Event()
    engine._submit(release.wait, TIMEOUT)
    buffer = bytearray((255, 0, 0, 255) * 4)

    future = engine.extract_colors(buffer)
    buffer[:] = bytes((0, 0, 255, 255) * 4)
    release.set()

    assert future.result(TIMEOUT) == [(1.0, 0.0, 0.0)]


def test_extract_each_keeps_submission_order(engine, make_buffer) -> None:
    images = [make_buffer(((255, 0, 0), 2)), None, make_buffer(((0, 255, 0), 2))]

    futures = engine.extract_each(images)

    assert [f.result(TIMEOUT) for f in futures] == [[(1.0, 0.0, 0.0)], [], [(0.0, 1.0, 0.0)]]


def test_shutdown_rejects_new_requests(make_buffer) -> None:
    with ColorEngine() as engine:
        pass

    assert engine.closed
    with pytest.raises(RuntimeError):
        engine.extract_colors(make_buffer(((255, 255, 255), 1)))


def test_single_avoid_string_is_one_color(engine, make_buffer) -> None:
    buffer = make_buffer(((255, 0, 0), 6), ((0, 0, 255), 3))

    colors = engine.extract_colors(buffer, ColorOptions.NONE, "red").result(TIMEOUT)

    assert colors == [pytest.approx((0.0, 0.0, 1.0))]
