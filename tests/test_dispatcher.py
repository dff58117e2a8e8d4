import logging
import threading

from dispatcher import ActionDispatcher

TIMEOUT = 5


def test_action_runs_with_arguments():
    dispatcher = ActionDispatcher()
    seen = []
    thread = dispatcher.dispatch(seen.append, "item-1")
    thread.join(TIMEOUT)
    assert seen == ["item-1"]
    assert not dispatcher.busy


def test_action_arriving_while_busy_is_dropped():
    dispatcher = ActionDispatcher()
    started, release = threading.Event(), threading.Event()
    ran = []

    def slow():
        started.set()
        release.wait(TIMEOUT)
        ran.append("slow")

    first = dispatcher.dispatch(slow)
    assert started.wait(TIMEOUT)
    assert dispatcher.busy
    assert dispatcher.dispatch(ran.append, "second") is None

    release.set()
    first.join(TIMEOUT)
    assert ran == ["slow"]

    dispatcher.dispatch(ran.append, "third").join(TIMEOUT)
    assert ran == ["slow", "third"]


def test_failing_action_is_logged_and_releases_the_lock(caplog):
    dispatcher = ActionDispatcher()

    def boom():
        raise RuntimeError("pasteboard unavailable")

    with caplog.at_level(logging.ERROR, logger="dispatcher"):
        dispatcher.dispatch(boom).join(TIMEOUT)
    assert "Stack action failed: pasteboard unavailable" in caplog.text
    assert not dispatcher.busy

    seen = []
    dispatcher.dispatch(seen.append, "after").join(TIMEOUT)
    assert seen == ["after"]
