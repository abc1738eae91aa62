"""
Service discovery.

Remote services are addressed by a logical name (for example
``SERVICE-CLIENT``). ``ServiceResolver`` turns that name into a base URL
using a static registry taken from configuration.
"""
from typing import Dict, Optional


class ServiceNotFound(LookupError):
    """Raised when a logical service name has no registered address."""

    def __init__(self, name: str):
        super().__init__(f"No address registered for service '{name}'")
        self.name = name


class ServiceResolver:
    """Resolve logical service names to base URLs.

    Names are matched case-insensitively and returned URLs never end with
    a slash, so callers can append ``/api/...`` paths directly.
    """

    def __init__(self, registry: Optional[Dict[str, str]] = None):
        self._registry = {
            name.upper(): url.rstrip("/")
            for name, url in (registry or {}).items()
        }

    def resolve(self, name: str) -> str:
        try:
            return self._registry[name.upper()]
        except KeyError:
            raise ServiceNotFound(name) from None
