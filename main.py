"""Config Inspector - Main CLI Entry Point

Compares the objects stored on a configuration server with their definitions
in a local repository and prints a pass/fail checklist per category.
"""

import sys
import logging
from pathlib import Path
from typing import Optional, List, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from inspector import __version__
from inspector.config import ConfigLoader, InspectorConfig, get_default_config
from inspector.checklist import ChecklistContext
from inspector.checklists import registry
from inspector.exceptions import ConfigError, InspectorError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/inspector-config.yaml"

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ABORTED = 2


class InspectorCLI:
    """Main inspector CLI application."""

    def __init__(self, config_path: Optional[str] = None, local_config_path: Optional[str] = None):
        """Initialize CLI application.

        Args:
            config_path: Optional path to configuration file
            local_config_path: Optional path to a local override file
        """
        self.console = Console(highlight=False, soft_wrap=True, emoji=False)
        self.error_console = Console(stderr=True, highlight=False)
        self.config_path = config_path
        self.local_config_path = local_config_path
        self.config: Optional[InspectorConfig] = None

    def load_configuration(self, overrides: Optional[dict] = None) -> bool:
        """Load and validate configuration.

        Args:
            overrides: Command line settings merged over the file

        Returns:
            True if configuration loaded successfully, False otherwise
        """
        try:
            config_path = self.config_path
            if not config_path and Path(DEFAULT_CONFIG_PATH).exists():
                config_path = DEFAULT_CONFIG_PATH

            if config_path:
                self.config = ConfigLoader.load_config(config_path, self.local_config_path)
            elif self.local_config_path:
                self.config = ConfigLoader.load_config(self.local_config_path)
            else:
                self.config = get_default_config()

            if overrides:
                merged = ConfigLoader.merge_configs(self.config.model_dump(), overrides)
                self.config = InspectorConfig(**merged)

            self._setup_logging()
            return True

        except ConfigError as e:
            self.error_console.print(Panel(
                f"[red]Configuration error: {str(e)}[/red]",
                title="Configuration Error",
                border_style="red"
            ))
            return False
        except Exception as e:
            self.error_console.print(Panel(
                f"[red]Invalid configuration: {str(e)}[/red]",
                title="Configuration Error",
                border_style="red"
            ))
            logger.exception("Failed to load configuration")
            return False

    def _setup_logging(self):
        """Setup logging based on configuration."""
        if not self.config:
            return

        log_config = self.config.logging
        log_level = getattr(logging, log_config.level.upper(), logging.WARNING)

        handlers: List[logging.Handler] = [
            logging.StreamHandler() if log_config.console_enabled else logging.NullHandler()
        ]
        if log_config.file_path:
            log_path = Path(log_config.file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_config.file_path))

        logging.basicConfig(
            level=log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers,
            force=True,
        )

        logger.debug("Logging initialized", extra={
            "level": log_config.level,
            "file": log_config.file_path
        })

    def select_checklists(self, requested: Tuple[str, ...]) -> List[str]:
        """Checklist names to run: the requested ones, the configured ones, or all."""
        names = list(requested) or list(self.config.checklists) or registry.names()
        return [registry.get(name).name for name in names]

    def inspect(self, checklist_names: List[str]) -> bool:
        """Run every selected checklist.

        Returns:
            True if every checklist passed
        """
        context = ChecklistContext.from_config(self.config, console=self.console)
        all_passed = True
        try:
            for name in checklist_names:
                checklist = registry.get(name)(context)
                passed = checklist.run()
                all_passed = all_passed and passed
        finally:
            context.close()
        return all_passed

    def display_checklists(self):
        """Display the registered checklists."""
        table = Table(title="Checklists", box=box.ROUNDED)
        table.add_column("Name", style="cyan")
        table.add_column("Option", style="white")
        table.add_column("Title", style="dim")

        for name, checklist_cls in registry.all().items():
            table.add_row(name, checklist_cls.option(), checklist_cls.title())

        self.console.print(table)

    def display_config(self):
        """Display configuration in organized format."""
        if not self.config:
            return

        table = Table(title="Inspector Settings", box=box.ROUNDED)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Repository", self.config.repo_path)
        table.add_row("Server URL", self.config.remote.base_url)
        table.add_row("Request Timeout", f"{self.config.remote.timeout}s")
        table.add_row("Verify SSL", "✓" if self.config.remote.verify_ssl else "✗")
        table.add_row("Workers", str(self.config.runner.max_workers or "auto"))
        table.add_row(
            "Item Timeout",
            f"{self.config.runner.item_timeout}s" if self.config.runner.item_timeout else "none"
        )
        table.add_row("Output Format", self.config.output.format)
        table.add_row("Checklists", ", ".join(self.config.checklists) or "all")
        table.add_row("Log Level", self.config.logging.level)

        self.console.print(table)
        self.console.print()
        self.console.print("[green]✓ Configuration is valid[/green]")


def build_overrides(
    output_format: Optional[str],
    workers: Optional[int],
    repo: Optional[str],
    server_url: Optional[str],
    item_timeout: Optional[float],
) -> dict:
    """Translate command line options into a configuration override."""
    overrides: dict = {}
    if output_format:
        overrides.setdefault("output", {})["format"] = output_format
    if workers is not None:
        overrides.setdefault("runner", {})["max_workers"] = workers
    if item_timeout is not None:
        overrides.setdefault("runner", {})["item_timeout"] = item_timeout
    if repo:
        overrides["repo_path"] = repo
    if server_url:
        overrides.setdefault("remote", {})["base_url"] = server_url
    return overrides


@click.group()
@click.option('--config', '-c', default=None, help=f'Path to configuration file (default: {DEFAULT_CONFIG_PATH})')
@click.option('--local-config', '-l', type=click.Path(exists=True, dir_okay=False), default=None,
              help='YAML file deep-merged over the configuration file')
@click.version_option(__version__, prog_name="inspector")
@click.pass_context
def cli(ctx, config, local_config):
    """Config Inspector - compare a configuration server with a local repository.

    Every object found on either side is validated, and differences are
    reported as a checklist or as JSON.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['local_config_path'] = local_config


@cli.command()
@click.argument('checklists', nargs=-1)
@click.option('--format', '-f', 'output_format', type=click.Choice(['human', 'json']), default=None,
              help='Output format')
@click.option('--workers', '-w', type=click.IntRange(min=1), default=None,
              help='Number of items validated in parallel (default: processor count)')
@click.option('--repo', '-r', default=None, help='Path to the local repository')
@click.option('--server-url', '-s', default=None, help='Configuration server URL')
@click.option('--item-timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Abort the run if one item takes longer than this many seconds')
@click.pass_context
def inspect(ctx, checklists, output_format, workers, repo, server_url, item_timeout):
    """Inspect one or more checklists (default: all).

    Exits with 0 when every item passed, 1 when some item failed and 2 when
    the run was aborted.
    """
    app = InspectorCLI(ctx.obj['config_path'], ctx.obj.get('local_config_path'))

    overrides = build_overrides(output_format, workers, repo, server_url, item_timeout)
    if not app.load_configuration(overrides):
        sys.exit(EXIT_ABORTED)

    try:
        names = app.select_checklists(checklists)
        all_passed = app.inspect(names)
    except KeyboardInterrupt:
        app.error_console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except InspectorError as e:
        logger.error(f"Inspection aborted: {e}")
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_ABORTED)
    except Exception as e:
        logger.exception("Unexpected error in inspect command")
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_ABORTED)

    sys.exit(EXIT_PASSED if all_passed else EXIT_FAILED)


@cli.command(name='list')
@click.pass_context
def list_checklists(ctx):
    """List the available checklists."""
    app = InspectorCLI(ctx.obj['config_path'], ctx.obj.get('local_config_path'))
    app.display_checklists()


@cli.command()
@click.pass_context
def config(ctx):
    """Validate and display configuration."""
    app = InspectorCLI(ctx.obj['config_path'], ctx.obj.get('local_config_path'))

    if not app.load_configuration():
        sys.exit(EXIT_ABORTED)

    app.display_config()


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
