# mirrorsync Run Guard
# Single-flight bookkeeping shared by every job kind

import threading


class RunGuard:
    """
    Mutual exclusion and running flag of one job.

    The lock is held only while a job checks and flips its running flag,
    never while the job's process is being waited on.
    """

    def __init__(self, retry: int):
        """
        Initialize guard.

        Args:
            retry: Retry count configured for the job.
        """
        self._lock = threading.Lock()
        self._running = False
        self._retry = retry

    def __enter__(self) -> "RunGuard":
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self._lock.release()

    @property
    def retry(self) -> int:
        return self._retry

    def is_running(self) -> bool:
        return self._running

    def set_running(self, running: bool) -> None:
        self._running = running
