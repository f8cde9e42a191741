class TcpScanError(Exception):
    """Base class for errors that abort a scan run."""


class CatalogLoadError(TcpScanError):
    """The service catalog is missing, unreadable or malformed."""


class ReportWriteError(TcpScanError):
    """The scan report could not be appended to the report file."""
