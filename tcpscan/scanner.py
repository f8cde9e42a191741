from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .dialer import probe
from .models import PortResult
from .results import ResultSet
from .services import ServiceCatalog

log = logging.getLogger(__name__)

_STOP = None


def scan_one(host: str, port: int, timeout_s: float, catalog: ServiceCatalog) -> PortResult:
    return PortResult(
        port=port,
        open=probe(host, port, timeout_s),
        service=catalog.name_for(port),
    )


class _Progress:
    """Logs scanned/total every ``every`` completed ports."""

    def __init__(self, total: int, every: int):
        self.total = total
        self.every = every
        self.scanned = 0
        self.open_count = 0
        self.started = time.perf_counter()
        self._lock = threading.Lock()

    def update(self, r: PortResult) -> None:
        if self.every <= 0:
            return
        with self._lock:
            self.scanned += 1
            if r.open:
                self.open_count += 1
            if self.scanned % self.every == 0 or self.scanned == self.total:
                elapsed = time.perf_counter() - self.started
                rate = self.scanned / elapsed if elapsed > 0 else 0.0
                log.info(
                    "Scanned %d/%d | open=%d | %.0f scans/s",
                    self.scanned, self.total, self.open_count, rate,
                )


class WorkerPool:
    """
    Fixed number of worker threads sharing one bounded queue of ports.

    The calling thread is the only producer: it enqueues the whole range and
    then one stop marker per worker.  run() returns only after every worker
    has exited, so the returned list is complete.
    """

    def __init__(
        self,
        catalog: ServiceCatalog,
        workers: int,
        timeout: float,
        queue_size: int = 100,
        progress_every: int = 0,
    ):
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.catalog = catalog
        self.workers = workers
        self.timeout = timeout
        self.queue_size = queue_size
        self.progress_every = progress_every

    def _worker(self, host: str, jobs: "queue.Queue[Optional[int]]", results: ResultSet,
                progress: _Progress, failed: threading.Event) -> int:
        # after an error keep taking ports until the stop marker so the
        # producer never blocks on a full queue
        handled = 0
        error: Optional[BaseException] = None
        while True:
            port = jobs.get()
            if port is _STOP:
                break
            if error is not None:
                continue
            try:
                r = scan_one(host, port, self.timeout, self.catalog)
            except Exception as e:
                error = e
                failed.set()
                continue
            results.add(r)
            progress.update(r)
            handled += 1
        if error is not None:
            raise error
        return handled

    def run(self, host: str, start: int, end: int) -> List[PortResult]:
        total = max(end - start + 1, 0)
        jobs: "queue.Queue[Optional[int]]" = queue.Queue(maxsize=self.queue_size)
        results = ResultSet()
        progress = _Progress(total, self.progress_every)
        failed = threading.Event()

        log.debug("Starting %d workers for %s ports %d-%d", self.workers, host, start, end)
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="tcpscan") as pool:
            futures = [
                pool.submit(self._worker, host, jobs, results, progress, failed)
                for _ in range(self.workers)
            ]

            aborted = True
            try:
                for port in range(start, end + 1):
                    if failed.is_set():
                        break
                    jobs.put(port)
                aborted = failed.is_set()
            finally:
                if aborted:
                    _drain(jobs)
                for _ in range(self.workers):
                    jobs.put(_STOP)

            # barrier: result() re-raises anything that escaped a worker
            handled = sum(f.result() for f in futures)

        log.debug("Workers finished, %d ports handled", handled)
        return results.snapshot()


def _drain(jobs: "queue.Queue[Optional[int]]") -> None:
    while True:
        try:
            jobs.get_nowait()
        except queue.Empty:
            return


def scan(
    host: str,
    start: int,
    end: int,
    timeout: float,
    workers: int,
    catalog: ServiceCatalog,
    progress_every: int = 0,
) -> List[PortResult]:
    pool = WorkerPool(catalog, workers, timeout, progress_every=progress_every)
    return pool.run(host, start, end)
