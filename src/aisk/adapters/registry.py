"""Client identifier to adapter mapping."""

from __future__ import annotations

from collections.abc import Callable

from aisk.adapters.base import Adapter
from aisk.adapters.directory import DirectoryAdapter
from aisk.adapters.dual_mode import DualModeAdapter
from aisk.adapters.errors import UnknownClientError
from aisk.adapters.rule_file import RuleFileAdapter
from aisk.adapters.section import SectionAdapter
from aisk.clients.models import ClientID

_ADAPTER_FACTORIES: dict[ClientID, Callable[[], Adapter]] = {
    ClientID.CLAUDE: DirectoryAdapter,
    ClientID.GEMINI: lambda: SectionAdapter("gemini"),
    ClientID.CODEX: lambda: SectionAdapter("codex"),
    ClientID.COPILOT: lambda: SectionAdapter("copilot"),
    ClientID.CURSOR: RuleFileAdapter,
    ClientID.WINDSURF: DualModeAdapter,
}


def adapter_for_client(client_id: ClientID | str) -> Adapter:
    """Return the adapter that installs skills for ``client_id``.

    Raises:
        UnknownClientError: If the identifier is not a supported client.
    """
    try:
        factory = _ADAPTER_FACTORIES[ClientID(client_id)]
    except (ValueError, KeyError):
        value = client_id.value if isinstance(client_id, ClientID) else str(client_id)
        raise UnknownClientError(value) from None
    return factory()
