"""Per-client installation adapters.

Each adapter maps one logical skill onto a client's on-disk representation.

Classes:
    Adapter: Abstract install/uninstall/describe contract.
    InstallOptions: Scope, reference inlining and dry-run flag.
    DirectoryAdapter: Symlinked or copied skill directory.
    RuleFileAdapter: One ``.mdc`` rule file per skill.
    SectionAdapter: Marker-delimited section in a shared markdown file.
    DualModeAdapter: Section globally, one ``.md`` file per skill in projects.

Exceptions:
    AdapterError: Base exception for adapter failures.
    UnknownClientError: No adapter for a client identifier.
    SectionMarkerError: Start marker without matching end marker.
"""

from __future__ import annotations

from aisk.adapters.base import Adapter, InstallOptions
from aisk.adapters.directory import DirectoryAdapter
from aisk.adapters.dual_mode import DualModeAdapter
from aisk.adapters.errors import AdapterError, SectionMarkerError, UnknownClientError
from aisk.adapters.registry import adapter_for_client
from aisk.adapters.rule_file import RuleFileAdapter
from aisk.adapters.section import SectionAdapter

__all__ = [
    "Adapter",
    "AdapterError",
    "DirectoryAdapter",
    "DualModeAdapter",
    "InstallOptions",
    "RuleFileAdapter",
    "SectionAdapter",
    "SectionMarkerError",
    "UnknownClientError",
    "adapter_for_client",
]
