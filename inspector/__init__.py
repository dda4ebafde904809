"""
Config Inspector - compare a configuration server with a local repository

Reconciles the objects stored on the server with their local definitions,
validates every one of them concurrently and reports a pass/fail checklist
with structural diffs, or a JSON document.
"""

__version__ = "0.1.0"

from inspector.config import (
    InspectorConfig,
    ConfigLoader,
    get_default_config,
)
from inspector.diff import DiffLeaf, DiffNode, diff
from inspector.models import Item, PresenceItem, RunResult
from inspector.reconciler import reconcile
from inspector.runner import ConcurrentRunner
from inspector.reporter import HumanReporter, JsonReporter, create_reporter
from inspector.checklist import (
    Checklist,
    ChecklistContext,
    ChecklistRegistry,
    ChecklistState,
)
from inspector.checklists import registry
from inspector.exceptions import (
    InspectorError,
    ConfigError,
    LoadError,
    RemoteError,
    ChecklistNotFoundError,
    ValidationAbortedError,
    ValidationTimeoutError,
)

__all__ = [
    # Configuration
    "InspectorConfig",
    "ConfigLoader",
    "get_default_config",
    # Models
    "DiffLeaf",
    "DiffNode",
    "diff",
    "Item",
    "PresenceItem",
    "RunResult",
    # Engine
    "reconcile",
    "ConcurrentRunner",
    "HumanReporter",
    "JsonReporter",
    "create_reporter",
    "Checklist",
    "ChecklistContext",
    "ChecklistRegistry",
    "ChecklistState",
    "registry",
    # Exceptions
    "InspectorError",
    "ConfigError",
    "LoadError",
    "RemoteError",
    "ChecklistNotFoundError",
    "ValidationAbortedError",
    "ValidationTimeoutError",
]
