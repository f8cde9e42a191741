from dataclasses import dataclass, field
from typing import Tuple

UNKNOWN_SERVICE = "unknown service"


@dataclass(frozen=True)
class PortResult:
    port: int
    open: bool
    service: str = UNKNOWN_SERVICE


@dataclass(frozen=True)
class ScanReport:
    host: str
    start_port: int
    end_port: int
    timeout_seconds: int
    worker_count: int
    duration_seconds: float
    timestamp: str
    open_ports: Tuple[PortResult, ...] = ()
    # full sorted result set, kept for console output only
    results: Tuple[PortResult, ...] = field(default=(), repr=False, compare=False)
