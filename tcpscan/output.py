from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from .errors import ReportWriteError
from .models import PortResult, ScanReport

log = logging.getLogger(__name__)

STATUS_LABELS = {
    "en": ("OPEN", "CLOSED"),
    "tr": ("AÇIK", "KAPALI"),
}


def status_label(is_open: bool, lang: str = "en") -> str:
    opened, closed = STATUS_LABELS[lang]
    return opened if is_open else closed


def format_row(r: PortResult, lang: str = "en") -> str:
    return f"Port {r.port} ({r.service}) {status_label(r.open, lang)}"


def print_results(results: Iterable[PortResult], open_only: bool = False, lang: str = "en") -> None:
    """Print results in the order given (the aggregator's order)."""
    results = list(results)
    open_count = sum(1 for r in results if r.open)
    print(f"Found {open_count} open ports")

    for r in results:
        if open_only and not r.open:
            continue
        print(format_row(r, lang))


def report_to_dict(report: ScanReport) -> Dict[str, Any]:
    return {
        "host": report.host,
        "start_port": report.start_port,
        "end_port": report.end_port,
        "timeout_seconds": report.timeout_seconds,
        "worker_count": report.worker_count,
        "duration_seconds": report.duration_seconds,
        "timestamp": report.timestamp,
        "open_ports": [{"port": r.port, "service": r.service} for r in report.open_ports],
    }


def append_report(report: ScanReport, path: Union[str, Path]) -> Path:
    """
    Append the report as a single JSON line.  Earlier lines are never touched,
    so the file is a log of every run.
    """
    path = Path(path)
    line = json.dumps(report_to_dict(report), ensure_ascii=False) + "\n"
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(line)
    except OSError as e:
        raise ReportWriteError(f"Could not append report to '{path}': {e}") from e

    log.debug("Appended report for %s to %s", report.host, path)
    return path


def read_reports(path: Union[str, Path]) -> List[Dict[str, Any]]:
    reports: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                reports.append(json.loads(line))
    return reports
