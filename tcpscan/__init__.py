"""
tcpscan
=======

Concurrent TCP connect port scanner.  A fixed pool of worker threads drains a
queue of port numbers, each port is annotated with a name from a static
service catalog, and every run appends one JSON report line to a log file.

The command line entry point is ``tcpscan.cli.main``.
"""

from .errors import CatalogLoadError, ReportWriteError, TcpScanError
from .models import UNKNOWN_SERVICE, PortResult, ScanReport

__version__ = "0.1.0"

__all__ = [
    "CatalogLoadError",
    "PortResult",
    "ReportWriteError",
    "ScanReport",
    "TcpScanError",
    "UNKNOWN_SERVICE",
    "__version__",
]
