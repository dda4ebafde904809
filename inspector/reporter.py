"""Terminal and JSON reporting for checklist runs."""

import abc
import json
import sys
from typing import Any, List, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from inspector.diff import DiffLeaf, DiffNode
from inspector.exceptions import ConfigError
from inspector.models import Item

OUTPUT_FORMATS = ("human", "json")

BANNER_WIDTH = 80
INDENT = "  "
BASE_DEPTH = 2


class Reporter(abc.ABC):
    """Receives items as they complete and renders the run."""

    def banner(self, title: str) -> None:
        pass

    @abc.abstractmethod
    def report(self, item: Item) -> None:
        ...

    def finish(self, items: List[Item]) -> None:
        pass

    @property
    def collects_items(self) -> bool:
        """Whether ``finish`` needs the full, ordered item list."""
        return False


class HumanReporter(Reporter):
    """Print a pass line or a failure block per item as soon as it finishes."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False, soft_wrap=True, emoji=False)

    def banner(self, title: str) -> None:
        self.console.print("")
        self.console.print(f"Inspecting {escape(title)}")
        self.console.print("-" * BANNER_WIDTH)

    def report(self, item: Item) -> None:
        if item.passed:
            self.print_success(item.name)
        else:
            self.print_failures(item)

    def print_success(self, subject: str) -> None:
        if self.console.is_terminal:
            self.console.print(f"[bold green]✓[/bold green] {escape(subject)}")
        else:
            self.console.print(f"Success {escape(subject)}")

    def print_failures(self, item: Item) -> None:
        self.console.print(f"[bold red]- {escape(item.name)}[/bold red]")

        for error in item.errors:
            if isinstance(error, DiffNode):
                self.console.print(
                    f"[bold yellow]{INDENT}has the following values mismatched on the server and repo[/bold yellow]"
                )
                self.print_diff(error)
            else:
                self.console.print(f"[bold yellow]{INDENT}{escape(str(error))}[/bold yellow]")

    def print_diff(self, node: DiffNode, depth: int = BASE_DEPTH) -> None:
        """Render a diff tree, one indentation level per nesting level."""
        for key, child in node.children.items():
            self.console.print(indent(f"[bold yellow]{escape(key)} : [/bold yellow]", depth))

            if isinstance(child, DiffLeaf):
                self.print_value_diff(child, depth)
            else:
                self.print_diff(child, depth + 1)

    def print_value_diff(self, leaf: DiffLeaf, depth: int) -> None:
        self.console.print(
            indent(f"[bold red]server value = [/bold red]{escape(format_value(leaf.server))}", depth + 1)
        )
        self.console.print(
            indent(f"[bold red]local value  = [/bold red]{escape(format_value(leaf.local))}", depth + 1)
        )
        self.console.print("")


class JsonReporter(Reporter):
    """Accumulate items and emit one pretty-printed JSON document at the end."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    @property
    def collects_items(self) -> bool:
        return True

    def report(self, item: Item) -> None:
        pass

    def finish(self, items: List[Item]) -> None:
        stream = self.stream or sys.stdout
        stream.write(json.dumps([item.to_dict() for item in items], indent=2, default=str))
        stream.write("\n")
        stream.flush()


def create_reporter(
    output_format: str,
    console: Optional[Console] = None,
    stream: Optional[TextIO] = None,
) -> Reporter:
    """Select the reporter for a run.

    Args:
        output_format: ``human`` or ``json``
        console: Console for human output
        stream: Stream for JSON output, defaults to stdout

    Returns:
        Reporter instance

    Raises:
        ConfigError: If the format is unknown
    """
    if output_format == "json":
        return JsonReporter(stream=stream)
    if output_format == "human":
        return HumanReporter(console=console)
    raise ConfigError(f"Output format must be one of {OUTPUT_FORMATS}, got '{output_format}'")


def indent(text: str, depth: int) -> str:
    return INDENT * depth + text


def format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)
