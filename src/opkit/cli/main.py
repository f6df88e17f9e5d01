"""opkit CLI - Main entry point."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from opkit import __version__
from opkit.config import ConfigError
from opkit.plugin import Capability, PluginError

console = Console(soft_wrap=True)
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

_CAPABILITIES = (
    Capability.INIT,
    Capability.CREATE_API,
    Capability.CREATE_WEBHOOK,
    Capability.EDIT,
)


def _setup_logging() -> None:
    """Configure a console handler on the root logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def _build_cli(plugins, project_version, project_file):
    from opkit.cli.app import OpkitCLI
    from opkit.plugins import default_registry, discover_external_plugins

    registry = default_registry(discover_external_plugins())
    return OpkitCLI(
        registry,
        plugins_flag=plugins,
        project_version_flag=project_version,
        project_file=Path(project_file) if project_file else None,
    )


@click.group()
@click.version_option(version=__version__, prog_name="opkit")
@click.option(
    "--plugins",
    default=None,
    help="Comma-separated plugin keys to use, e.g. 'go/v4,grafana'",
)
@click.option(
    "--project-version",
    default=None,
    help="Project configuration version, e.g. '3'",
)
@click.option(
    "--project-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the project configuration file (default: ./PROJECT)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, plugins, project_version, project_file, verbose):
    """opkit - Kubernetes operator scaffolding

    Plugins contribute the files generated by each command. Select them with
    --plugins, or let the project file and defaults decide.
    """
    if verbose:
        logging.getLogger("opkit").setLevel(logging.DEBUG)
    try:
        ctx.obj = _build_cli(plugins, project_version, project_file)
    except PluginError as e:
        console.print(f"[red]Plugin setup failed:[/red] {escape(str(e))}")
        raise SystemExit(1) from None


def _run_pipeline(app, capability: Capability, command: str, **args) -> None:
    try:
        for plugin_key, warning in app.deprecation_warnings():
            console.print(f"[yellow]{escape(plugin_key)}: {escape(warning)}[/yellow]")
        steps = app.run(capability, command, **args)
    except (PluginError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from None

    inputs = app.inputs
    console.print(
        f"[bold]{command}[/bold] (project version {inputs.project_version})"
    )
    for i, p in enumerate(steps, 1):
        console.print(f"  {i}. [cyan]{escape(p.key)}[/cyan]")


@cli.command()
@click.option("--domain", default="my.domain", help="Domain for API groups")
@click.option("--repo", default="", help="Go module name")
@click.option("--project-name", default="", help="Name of the project")
@click.pass_obj
def init(app, domain, repo, project_name):
    """Initialize a new project."""
    _run_pipeline(
        app, Capability.INIT, "init", domain=domain, repo=repo, project_name=project_name
    )


@cli.group()
def create():
    """Scaffold a Kubernetes API or webhook."""


@create.command()
@click.option("--group", required=True, help="Resource group")
@click.option("--version", "api_version", required=True, help="Resource version")
@click.option("--kind", required=True, help="Resource kind")
@click.pass_obj
def api(app, group, api_version, kind):
    """Scaffold a Kubernetes API."""
    _run_pipeline(
        app, Capability.CREATE_API, "create api", group=group, version=api_version, kind=kind
    )


@create.command()
@click.option("--group", required=True, help="Resource group")
@click.option("--version", "api_version", required=True, help="Resource version")
@click.option("--kind", required=True, help="Resource kind")
@click.pass_obj
def webhook(app, group, api_version, kind):
    """Scaffold a webhook for an API resource."""
    _run_pipeline(
        app,
        Capability.CREATE_WEBHOOK,
        "create webhook",
        group=group,
        version=api_version,
        kind=kind,
    )


@cli.command()
@click.pass_obj
def edit(app):
    """Update the project configuration."""
    _run_pipeline(app, Capability.EDIT, "edit")


@cli.command("plugins")
@click.pass_obj
def list_plugins(app):
    """List available plugins."""
    registry = app.registry
    defaults: dict[str, list[str]] = {}
    for v in registry.default_project_versions():
        for k in registry.default_plugin_keys(v):
            defaults.setdefault(k, []).append(str(v))

    table = Table(title="Available Plugins")
    table.add_column("Key", style="cyan")
    table.add_column("Project versions")
    table.add_column("Capabilities")
    table.add_column("Default for")
    table.add_column("Description")

    for p in registry.plugins():
        capabilities = [c.label for c in _CAPABILITIES if p.supports(c)]
        key_text = escape(p.key) + (" [yellow](deprecated)[/yellow]" if p.is_deprecated else "")
        table.add_row(
            key_text,
            ", ".join(str(v) for v in p.supported_project_versions),
            ", ".join(capabilities),
            ", ".join(defaults.get(p.key, [])),
            escape(p.description),
        )

    console.print(table)


def main() -> None:
    """Console script entry point."""
    _setup_logging()
    cli()


if __name__ == "__main__":
    main()
