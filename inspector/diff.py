"""
Structural diff trees.

A diff between a server and a local representation is a tree whose inner
nodes are keyed by field-path segments and whose leaves hold the two
diverging values. Leaves are exactly ``{"server": ..., "local": ...}`` when
serialized; every other mapping is an inner node.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Union

LEAF_KEYS = frozenset({"server", "local"})

_MISSING = object()


@dataclass(frozen=True)
class DiffLeaf:
    """Two diverging values for the same field."""
    server: Any
    local: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"server": self.server, "local": self.local}


@dataclass
class DiffNode:
    """Nested mismatches, keyed by field name."""
    children: Dict[str, "DiffTree"] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def to_dict(self) -> Dict[str, Any]:
        return {key: child.to_dict() for key, child in self.children.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiffNode":
        """Build a tree from its serialized mapping form.

        Args:
            data: Nested mapping as produced by ``to_dict``

        Returns:
            Parsed DiffNode

        Raises:
            ValueError: If a nested value is neither a leaf nor a mapping
        """
        children: Dict[str, DiffTree] = {}
        for key, value in data.items():
            if not isinstance(value, Mapping):
                raise ValueError(f"Diff entry '{key}' must be a mapping, got {type(value).__name__}")
            if is_leaf(value):
                children[str(key)] = DiffLeaf(server=value["server"], local=value["local"])
            else:
                children[str(key)] = cls.from_dict(value)
        return cls(children=children)


DiffTree = Union[DiffLeaf, DiffNode]


def is_leaf(value: Mapping[str, Any]) -> bool:
    """A mapping is a leaf iff its keys are exactly ``server`` and ``local``."""
    return set(value.keys()) == LEAF_KEYS


def normalize(value: Any) -> Any:
    """Return a JSON-canonical copy of ``value`` (string keys, lists for tuples)."""
    if value is None:
        return None
    return json.loads(json.dumps(value, default=str))


def diff(server: Mapping[str, Any], local: Mapping[str, Any]) -> DiffNode:
    """Compute the recursive difference between two mappings.

    Keys are visited server-first, then keys only present locally. Equal values
    are skipped, mappings on both sides are compared recursively, and anything
    else becomes a leaf. A key present on one side only is always a leaf, even
    when the other side holds ``None``; the missing side contributes ``None``.

    Args:
        server: Remote representation
        local: Local representation

    Returns:
        DiffNode, empty when both sides are structurally identical
    """
    result = DiffNode()
    keys = list(server.keys()) + [key for key in local.keys() if key not in server]

    for key in keys:
        server_value = server.get(key, _MISSING)
        local_value = local.get(key, _MISSING)
        if server_value is _MISSING or local_value is _MISSING:
            result.children[str(key)] = DiffLeaf(
                server=None if server_value is _MISSING else server_value,
                local=None if local_value is _MISSING else local_value,
            )
            continue

        if server_value == local_value:
            continue

        if isinstance(server_value, Mapping) and isinstance(local_value, Mapping):
            nested = diff(server_value, local_value)
            if nested:
                result.children[str(key)] = nested
        else:
            result.children[str(key)] = DiffLeaf(server=server_value, local=local_value)

    return result
