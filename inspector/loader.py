"""
Local definition loading.

Definitions live under ``<repo>/<folder>/**/<name>.<ext>``. Extensions are
searched in priority order and the first one with a match wins.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set

import yaml

from inspector.exceptions import LoadError

logger = logging.getLogger(__name__)

Parser = Callable[[str], Any]

SEARCH_ORDER = ("rb", "json", "js", "yaml", "yml")


def parse_json(text: str) -> Any:
    return json.loads(text)


def parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


DEFAULT_PARSERS: Dict[str, Parser] = {
    "json": parse_json,
    "js": parse_json,
    "yaml": parse_yaml,
    "yml": parse_yaml,
}


class LocalDefinitionLoader:
    """Find and parse local definition files in a repository checkout."""

    def __init__(
        self,
        repo_path: str,
        parsers: Optional[Dict[str, Parser]] = None,
        search_order: tuple = SEARCH_ORDER,
    ):
        """
        Initialize the loader.

        Args:
            repo_path: Root of the local repository
            parsers: Extra or replacement parsers keyed by file extension.
                ``rb`` has no default parser; matches are skipped until one
                is registered.
            search_order: Extensions in priority order
        """
        self.repo_path = Path(repo_path)
        self.parsers = dict(DEFAULT_PARSERS)
        if parsers:
            self.parsers.update(parsers)
        self.search_order = search_order

    def find(self, folder: str, name: str) -> Optional[Path]:
        """Return the definition file that would be loaded for ``name``."""
        base = self.repo_path / folder
        for extension in self.search_order:
            matches = sorted(base.glob(f"**/{name}.{extension}"))
            if not matches:
                continue
            if extension not in self.parsers:
                logger.warning(f"No parser registered for .{extension}, skipping {matches[0]}")
                continue
            return matches[0]
        return None

    def load(self, folder: str, name: str) -> Optional[Dict[str, Any]]:
        """Load and parse the definition of ``name``.

        Returns:
            Parsed mapping, or None if no definition exists

        Raises:
            LoadError: If the file cannot be read or parsed
        """
        path = self.find(folder, name)
        if path is None:
            return None

        parser = self.parsers[path.suffix.lstrip(".")]
        try:
            text = path.read_text(encoding="utf-8")
            data = parser(text)
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(str(path), f"unreadable: {e}")
        except (ValueError, yaml.YAMLError) as e:
            raise LoadError(str(path), f"unparseable: {e}")

        if not isinstance(data, dict):
            raise LoadError(str(path), f"expected a mapping, got {type(data).__name__}")

        logger.debug(f"Loaded {path}")
        return data

    def list_names(self, folder: str) -> Set[str]:
        """Names of every definition under ``folder`` with a known extension."""
        base = self.repo_path / folder
        if not base.is_dir():
            return set()

        names: Set[str] = set()
        for extension in self.search_order:
            paths = [path for path in base.glob(f"**/*.{extension}") if path.is_file()]
            if extension not in self.parsers:
                if paths:
                    logger.warning(
                        f"No parser registered for .{extension}, ignoring {len(paths)} definitions in {base}"
                    )
                continue
            names.update(path.stem for path in paths)
        return names

    def list_folders(self, folder: str) -> List[str]:
        """Names of the direct sub-directories of ``folder``."""
        base = self.repo_path / folder
        if not base.is_dir():
            return []
        return sorted(path.name for path in base.iterdir() if path.is_dir())
