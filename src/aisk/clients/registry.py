"""Registry of known AI clients."""

from __future__ import annotations

import logging

from aisk.clients.models import Client, ClientID

logger = logging.getLogger(__name__)

# Display name, supports global, supports project.
_CLIENT_TRAITS: dict[ClientID, tuple[str, bool, bool]] = {
    ClientID.CLAUDE: ("Claude Code", True, True),
    ClientID.GEMINI: ("Gemini CLI", True, True),
    ClientID.CODEX: ("Codex CLI", True, True),
    ClientID.COPILOT: ("VS Code Copilot", False, True),
    ClientID.CURSOR: ("Cursor", False, True),
    ClientID.WINDSURF: ("Windsurf", True, True),
}


def parse_client_id(value: str) -> ClientID:
    """Convert user input to a ``ClientID``.

    Raises:
        ValueError: If the value names no known client.
    """
    try:
        return ClientID(value.strip().lower())
    except ValueError:
        valid = ", ".join(client.value for client in ClientID)
        raise ValueError(f"unknown client '{value}' (valid: {valid})") from None


class ClientRegistry:
    """Ordered collection of ``Client`` descriptors.

    Example::

        registry = ClientRegistry.default()
        detect_all(registry, home=Path.home(), project_root=Path.cwd())
        for client in registry.detected():
            ...
    """

    def __init__(self, clients: list[Client] | None = None) -> None:
        self._clients: dict[ClientID, Client] = {client.id: client for client in clients or []}

    @classmethod
    def default(cls) -> ClientRegistry:
        """Registry with every supported client, nothing detected yet."""
        return cls(
            [
                Client(id=client_id, name=name, supports_global=glob, supports_project=proj)
                for client_id, (name, glob, proj) in _CLIENT_TRAITS.items()
            ]
        )

    def get(self, client_id: ClientID | str) -> Client:
        """Look up a client.

        Raises:
            KeyError: If the client is not registered.
        """
        return self._clients[ClientID(client_id)]

    def all(self) -> list[Client]:
        """Every registered client in registration order."""
        return list(self._clients.values())

    def detected(self) -> list[Client]:
        """Clients found on this machine."""
        return [client for client in self._clients.values() if client.detected]

    def __contains__(self, client_id: object) -> bool:
        try:
            return ClientID(client_id) in self._clients
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._clients)
