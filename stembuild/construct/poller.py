"""Fixed-interval polling until a condition holds."""

import logging
import time

logger = logging.getLogger(__name__)


class Poller:
    """Call a condition every *interval* seconds until it returns True.

    There is no timeout; callers that need a deadline enforce it inside the
    condition. The first exception raised by the condition stops polling and
    propagates to the caller unchanged.
    """

    def __init__(self, sleep=None):
        self._sleep = sleep if sleep is not None else time.sleep

    def poll(self, interval, condition):
        attempt = 0
        while True:
            attempt += 1
            logger.debug(f"Poll attempt {attempt}")
            if condition():
                return
            self._sleep(interval)
