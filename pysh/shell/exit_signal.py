"""
Exit Signal Module

A small bounded channel used by the `exit` built-in to ask the loop to
stop. The built-in sends while the line is being dispatched; the loop polls
at the top of its next iteration. Neither side ever waits.

Author: YSNRFD
Version: 1.0.0
"""

import queue

from pysh.logger import get_logger


class ExitSignal:
    """
    Non-blocking exit notification.

    Holds up to `capacity` pending signals. Sending to a full channel
    drops the signal instead of blocking: one pending signal is already
    enough to stop the loop.

    Example:
        >>> signal = ExitSignal()
        >>> signal.send()
        True
        >>> signal.poll()
        True
        >>> signal.poll()
        False
    """

    DEFAULT_CAPACITY = 2

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 2:
            raise ValueError("exit signal capacity must be at least 2")
        self._capacity = capacity
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)
        self._logger = get_logger('shell')

    @property
    def capacity(self) -> int:
        return self._capacity

    def send(self) -> bool:
        """
        Request loop termination.

        Returns:
            True if the signal was queued, False if the channel was full
        """
        try:
            self._queue.put_nowait(None)
        except queue.Full:
            self._logger.debug("Exit signal dropped, channel full")
            return False
        return True

    def poll(self) -> bool:
        """Consume one pending signal, if any, without waiting."""
        try:
            self._queue.get_nowait()
        except queue.Empty:
            return False
        return True

    def pending(self) -> int:
        """Approximate number of queued signals."""
        return self._queue.qsize()
