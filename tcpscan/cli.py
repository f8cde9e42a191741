from __future__ import annotations

import argparse
import logging
import sys
import time

from .errors import CatalogLoadError, ReportWriteError
from .output import STATUS_LABELS, append_report, print_results
from .results import finalize
from .scanner import scan
from .services import load_catalog

log = logging.getLogger(__name__)

DEFAULT_HOST = "scanme.nmap.org"
DEFAULT_SERVICES = "services.json"
DEFAULT_OUTPUT = "open_ports.jsonl"


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tcpscan", description="Concurrent TCP connect port scanner")
    p.add_argument("--host", default=DEFAULT_HOST, help=f"Target IP or hostname (default: {DEFAULT_HOST})")
    p.add_argument("--start", type=int, default=1, help="First port, inclusive (default: 1)")
    p.add_argument("--end", type=int, default=6000, help="Last port, inclusive (default: 6000)")
    p.add_argument("--timeout", type=int, default=1, help="Connect timeout in seconds (default: 1)")
    p.add_argument("--workers", type=int, default=100, help="Worker thread count (default: 100)")
    p.add_argument("--services", default=DEFAULT_SERVICES, help=f"Service catalog JSON (default: {DEFAULT_SERVICES})")
    p.add_argument("--output", default=DEFAULT_OUTPUT, help=f"JSON Lines report log (default: {DEFAULT_OUTPUT})")
    p.add_argument("--open-only", action="store_true", help="Only print open ports")
    p.add_argument("--lang", choices=sorted(STATUS_LABELS), default="en", help="Language of OPEN/CLOSED labels")
    p.add_argument("--progress-every", type=int, default=0, help="Log progress every N ports (default: off)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.workers < 1:
        parser.error("--workers must be >= 1")

    setup_logging(args.verbose)

    try:
        catalog = load_catalog(args.services)
    except CatalogLoadError as e:
        log.error("Service list could not be loaded: %s", e)
        return 1

    if args.start > args.end:
        log.warning("Start port %d is greater than end port %d, nothing to scan", args.start, args.end)

    log.info("Scanning %s ports %d-%d with %d workers", args.host, args.start, args.end, args.workers)
    started = time.perf_counter()
    try:
        results = scan(
            host=args.host,
            start=args.start,
            end=args.end,
            timeout=args.timeout,
            workers=args.workers,
            catalog=catalog,
            progress_every=args.progress_every,
        )
    except KeyboardInterrupt:
        print("\n[!] Interrupted by user.", file=sys.stderr)
        return 130
    duration = time.perf_counter() - started

    report = finalize(
        results,
        host=args.host,
        start_port=args.start,
        end_port=args.end,
        timeout_seconds=args.timeout,
        worker_count=args.workers,
        duration_seconds=duration,
    )

    print_results(report.results, open_only=args.open_only, lang=args.lang)

    try:
        path = append_report(report, args.output)
    except ReportWriteError as e:
        log.error("%s", e)
        return 1

    print(f"Scan report appended to {path}")
    return 0
