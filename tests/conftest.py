import json
import socket

import pytest

from tcpscan.services import ServiceCatalog


@pytest.fixture
def listening_port():
    """A loopback port that accepts connections for the duration of the test."""
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    srv.bind(("127.0.0.1", 0))
    srv.listen(128)
    try:
        yield srv.getsockname()[1]
    finally:
        srv.close()


@pytest.fixture
def closed_port():
    """A loopback port with nothing listening on it."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port


@pytest.fixture
def catalog():
    return ServiceCatalog({"80": "http", "443": "https"})


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "services.json"
    path.write_text(json.dumps({"80": "http", "443": "https"}), encoding="utf-8")
    return path


@pytest.fixture
def fake_probe(monkeypatch):
    """Replace network dialing with a fixed set of open ports."""
    open_ports = set()

    def probe(host, port, timeout):
        return port in open_ports

    monkeypatch.setattr("tcpscan.scanner.probe", probe)
    return open_ports
