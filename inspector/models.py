"""Data objects for checklist runs."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from inspector.diff import DiffNode, diff, normalize

Discrepancy = Union[str, DiffNode]

MISSING_EVERYWHERE = "missing on server and locally"
MISSING_ON_SERVER = "missing on server"
MISSING_LOCALLY = "missing locally"


@dataclass
class Item:
    """One named object compared between the server and the local repository.

    ``errors`` only means something once ``validate`` has run; before that the
    item is pending and must not be reported.
    """
    name: str
    server: Optional[Dict[str, Any]] = None
    local: Optional[Dict[str, Any]] = None
    errors: List[Discrepancy] = field(default_factory=list)
    validated: bool = False

    @property
    def passed(self) -> bool:
        self._require_validated()
        return not self.errors

    def validate(self) -> "Item":
        """Populate ``errors``. May only be called once."""
        if self.validated:
            raise RuntimeError(f"Item '{self.name}' has already been validated")

        self.errors = self.compare()
        self.validated = True
        return self

    def compare(self) -> List[Discrepancy]:
        """Return every discrepancy between the two representations."""
        if self.server is None and self.local is None:
            return [MISSING_EVERYWHERE]
        if self.server is None:
            return [MISSING_ON_SERVER]
        if self.local is None:
            return [MISSING_LOCALLY]

        mismatches = diff(normalize(self.server), normalize(self.local))
        return [mismatches] if mismatches else []

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON report record."""
        self._require_validated()
        return {
            "name": self.name,
            "server": self.server,
            "local": self.local,
            "errors": [
                error.to_dict() if isinstance(error, DiffNode) else error
                for error in self.errors
            ],
        }

    def _require_validated(self) -> None:
        if not self.validated:
            raise ValueError(f"Item '{self.name}' is still pending validation")


class PresenceItem(Item):
    """An item whose content is not compared, only its existence on both sides."""

    def compare(self) -> List[Discrepancy]:
        if self.server is None or self.local is None:
            return super().compare()
        return []


@dataclass
class RunResult:
    """Aggregate outcome of one checklist run."""
    checklist: str
    all_passed: bool = True
    total: int = 0
    failed: int = 0
    items: List[Item] = field(default_factory=list)

    def record(self, item: Item) -> None:
        self.total += 1
        if not item.passed:
            self.failed += 1
            self.all_passed = False
