import logging
import threading

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Run stack actions on a worker thread, one at a time.

    An action that arrives while another is still running is dropped.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def dispatch(self, action, *args):
        """Start ``action(*args)`` in the background.

        Returns the worker thread, or None when the action was dropped.
        """
        if not self._lock.acquire(blocking=False):
            logger.debug(f"Busy, ignoring {getattr(action, '__name__', action)}")
            return None

        def run():
            try:
                action(*args)
            except Exception as e:
                logger.error(f"Stack action failed: {e}")
            finally:
                self._lock.release()

        thread = threading.Thread(target=run, daemon=True)
        try:
            thread.start()
        except RuntimeError:
            self._lock.release()
            raise
        return thread
