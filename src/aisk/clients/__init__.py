"""AI client registry and detection.

Classes:
    Client: One AI client with its target paths.
    ClientRegistry: Ordered collection of clients.

Enums:
    ClientID: Supported client identifiers.
"""

from __future__ import annotations

from aisk.clients.detect import detect_all, resolve_paths
from aisk.clients.models import Client, ClientID
from aisk.clients.registry import ClientRegistry, parse_client_id

__all__ = [
    "Client",
    "ClientID",
    "ClientRegistry",
    "detect_all",
    "parse_client_id",
    "resolve_paths",
]
