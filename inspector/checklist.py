"""
Checklist driver.

A checklist inspects one category of configuration objects: it reconciles the
names stored on the server with the ones defined locally, validates every
item concurrently and reports each result as it completes.
"""

import abc
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set, TextIO, Type

from rich.console import Console

from inspector.config import InspectorConfig
from inspector.exceptions import ChecklistNotFoundError, LoadError, ValidationCancelledError
from inspector.loader import LocalDefinitionLoader
from inspector.models import Item, RunResult
from inspector.reconciler import reconcile
from inspector.remote import RemoteClient
from inspector.reporter import Reporter, create_reporter
from inspector.runner import ConcurrentRunner

logger = logging.getLogger(__name__)


class ChecklistState(str, Enum):
    INIT = "init"
    RECONCILING = "reconciling"
    VALIDATING = "validating"
    REPORTING = "reporting"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class ChecklistContext:
    """Collaborators shared by every checklist of one invocation."""

    config: InspectorConfig
    remote: RemoteClient
    loader: LocalDefinitionLoader
    reporter: Reporter
    runner: ConcurrentRunner

    @classmethod
    def from_config(
        cls,
        config: InspectorConfig,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
    ) -> "ChecklistContext":
        """Build the default collaborators from configuration.

        The output mode is decided here, once, for every run using this context.
        """
        # A single request never outlives the item it belongs to.
        timeout = config.remote.timeout
        if config.runner.item_timeout is not None:
            timeout = min(timeout, config.runner.item_timeout)

        remote = RemoteClient(
            base_url=config.remote.base_url,
            timeout=timeout,
            verify_ssl=config.remote.verify_ssl,
            headers=config.remote.headers,
        )
        return cls(
            config=config,
            remote=remote,
            loader=LocalDefinitionLoader(config.repo_path),
            reporter=create_reporter(config.output.format, console=console, stream=stream),
            runner=ConcurrentRunner(
                max_workers=config.runner.max_workers,
                item_timeout=config.runner.item_timeout,
            ),
        )

    def close(self) -> None:
        self.remote.close()


class Checklist(abc.ABC):
    """Base class for one category of inspected objects.

    Subclasses declare ``name`` and implement the four loading hooks; the
    comparison itself is done by ``item_class``.
    """

    name: str = ""
    item_class: Type[Item] = Item

    def __init__(self, context: ChecklistContext):
        self.context = context
        self.state = ChecklistState.INIT
        self.last_result: Optional[RunResult] = None

    @classmethod
    def title(cls) -> str:
        return cls.name.replace("_", " ").lower()

    @classmethod
    def option(cls) -> str:
        return cls.name.replace("_", "-").lower()

    @property
    def remote(self) -> RemoteClient:
        return self.context.remote

    @property
    def loader(self) -> LocalDefinitionLoader:
        return self.context.loader

    @abc.abstractmethod
    def fetch_remote_names(self) -> Set[str]:
        ...

    @abc.abstractmethod
    def fetch_local_names(self) -> Set[str]:
        ...

    @abc.abstractmethod
    def load_server_item(self, name: str) -> Optional[Dict[str, Any]]:
        ...

    @abc.abstractmethod
    def load_local_item(self, name: str) -> Optional[Dict[str, Any]]:
        """Local representation of ``name``, or None.

        May raise LoadError; ``validate`` treats it as absence.
        """
        ...

    def all_item_names(self) -> List[str]:
        return reconcile(self.fetch_remote_names(), self.fetch_local_names())

    def validate(self, name: str) -> Item:
        """Load both representations of ``name`` and compare them.

        Raises:
            ValidationCancelledError: If the run was aborted before a load started
        """
        self._check_cancelled(name)
        server = self.load_server_item(name)

        self._check_cancelled(name)
        try:
            local = self.load_local_item(name)
        except LoadError as e:
            logger.warning(f"Treating local {self.name} '{name}' as missing: {e}")
            local = None

        return self.item_class(name=name, server=server, local=local).validate()

    def _check_cancelled(self, name: str) -> None:
        if self.context.runner.cancelled:
            raise ValidationCancelledError(name)

    def run(self) -> bool:
        """Inspect every item and report the results.

        Returns:
            True if every item passed
        """
        reporter = self.context.reporter
        format_json = reporter.collects_items
        result = RunResult(checklist=self.name)

        def finish(item: Item) -> None:
            reporter.report(item)
            result.record(item)

        try:
            if not format_json:
                reporter.banner(self.title())

            self.state = ChecklistState.RECONCILING
            names = self.all_item_names()
            logger.info(f"Inspecting {len(names)} {self.title()}")

            self.state = ChecklistState.VALIDATING
            items = self.context.runner.run_all(names, self.validate, on_complete=finish)

            self.state = ChecklistState.REPORTING
            if format_json:
                result.items = items
                reporter.finish(items)
        except BaseException:
            self.state = ChecklistState.ABORTED
            raise

        self.state = ChecklistState.DONE
        self.last_result = result
        logger.info(f"Inspected {result.total} {self.title()}, {result.failed} failed")
        return result.all_passed


class ChecklistRegistry:
    """Registry of available checklists, keyed by name."""

    def __init__(self) -> None:
        self._by_name: Dict[str, Type[Checklist]] = {}

    def register(self, checklist_cls: Type[Checklist]) -> Type[Checklist]:
        if not checklist_cls.name:
            raise ValueError(f"{checklist_cls.__name__} does not declare a name")
        self._by_name[checklist_cls.name] = checklist_cls
        return checklist_cls

    def get(self, name: str) -> Type[Checklist]:
        key = name.strip().lower().replace("-", "_")
        try:
            return self._by_name[key]
        except KeyError:
            raise ChecklistNotFoundError(name)

    def names(self) -> List[str]:
        return list(self._by_name)

    def all(self) -> Dict[str, Type[Checklist]]:
        return dict(self._by_name)


registry = ChecklistRegistry()
