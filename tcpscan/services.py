from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

from .errors import CatalogLoadError
from .models import UNKNOWN_SERVICE

log = logging.getLogger(__name__)


class ServiceCatalog:
    """
    Read-only port -> service name lookup.

    Keys are decimal port strings ("22", "443"), exactly as they appear in
    services.json.  The mapping is frozen after construction so worker
    threads can share one instance without locking.
    """

    def __init__(self, names: Mapping[str, str]):
        self._names: Mapping[str, str] = MappingProxyType(dict(names))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ServiceCatalog":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogLoadError(f"Could not read service catalog '{path}': {e}") from e

        try:
            data = json.loads(text)
        except ValueError as e:
            raise CatalogLoadError(f"Service catalog '{path}' is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CatalogLoadError(
                f"Service catalog '{path}' must be a JSON object, got {type(data).__name__}"
            )

        for key, value in data.items():
            if not isinstance(value, str):
                raise CatalogLoadError(
                    f"Service catalog '{path}': name for port {key!r} must be a string"
                )

        log.debug("Loaded %d service names from %s", len(data), path)
        return cls(data)

    def name_for(self, port: int) -> str:
        return self._names.get(str(port), UNKNOWN_SERVICE)

    def __contains__(self, port: object) -> bool:
        return str(port) in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"ServiceCatalog({len(self)} entries)"


def load_catalog(path: Union[str, Path]) -> ServiceCatalog:
    return ServiceCatalog.load(path)
