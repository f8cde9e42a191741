from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .models import PortResult, ScanReport

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class ResultSet:
    """
    Results of one scan run.  Workers only ever append; the owner reads it
    back with snapshot() once every worker has exited.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: List[PortResult] = []

    def add(self, result: PortResult) -> None:
        with self._lock:
            self._items.append(result)

    def snapshot(self) -> List[PortResult]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def sort_key(r: PortResult):
    # open ports first, then ascending port number
    return (not r.open, r.port)


def sort_results(results: Iterable[PortResult]) -> List[PortResult]:
    return sorted(results, key=sort_key)


def open_only(results: Iterable[PortResult]) -> List[PortResult]:
    return [r for r in results if r.open]


def rfc3339(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime(RFC3339_FORMAT)


def finalize(
    results: Iterable[PortResult],
    host: str,
    start_port: int,
    end_port: int,
    timeout_seconds: int,
    worker_count: int,
    duration_seconds: float,
    finished: Optional[datetime] = None,
) -> ScanReport:
    """
    Build the report for a finished scan.

    The ordering is fixed (open first, then by port) so two runs over the same
    host print and persist identical sequences whatever order the workers
    finished in.  ``finished`` defaults to now and is stamped in UTC.
    """
    ordered = sort_results(results)
    if finished is None:
        finished = datetime.now(timezone.utc)

    return ScanReport(
        host=host,
        start_port=start_port,
        end_port=end_port,
        timeout_seconds=timeout_seconds,
        worker_count=worker_count,
        duration_seconds=float(duration_seconds),
        timestamp=rfc3339(finished),
        open_ports=tuple(open_only(ordered)),
        results=tuple(ordered),
    )
