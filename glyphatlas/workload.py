"""Splitting a chunked workload across worker threads."""

from __future__ import annotations

import itertools
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

WorkerFunction = Callable[[int, int], bool]


class Workload:
    """A job split into numbered chunks, processed by a worker function.

    The worker is called as ``worker(chunk, thread_no)`` and returns True when
    the chunk was processed. Returning False interrupts the whole workload.
    """

    def __init__(self, worker: WorkerFunction, chunks: int) -> None:
        self.worker = worker
        self.chunks = chunks

    def finish(self, thread_count: int) -> bool:
        """Process all chunks; return True if every chunk was processed.

        Raises ValueError if the thread count is below one while more than one
        chunk remains to be processed. Exceptions raised by the worker propagate.
        """
        if not self.chunks:
            return True
        if thread_count == 1 or self.chunks == 1:
            return self._finish_sequential()
        if thread_count > 1:
            return self._finish_parallel(min(thread_count, self.chunks))
        raise ValueError(f"thread count must be at least 1, got {thread_count}")

    def _finish_sequential(self) -> bool:
        return all(self.worker(chunk, 0) for chunk in range(self.chunks))

    def _finish_parallel(self, thread_count: int) -> bool:
        counter = itertools.count()
        lock = threading.Lock()
        failed = threading.Event()

        def run(thread_no: int) -> None:
            while True:
                with lock:
                    chunk = next(counter)
                if chunk >= self.chunks or failed.is_set():
                    return
                if not self.worker(chunk, thread_no):
                    failed.set()

        with ThreadPoolExecutor(max_workers=thread_count) as executor:
            futures = [executor.submit(run, thread_no) for thread_no in range(thread_count)]
        for future in futures:
            future.result()
        return not failed.is_set()