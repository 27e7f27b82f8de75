"""catlingo command-line interface."""

import logging

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

# Load .env file before importing config
load_dotenv()

from catlingo.config import get_settings  # noqa: E402
from catlingo.connectors import (  # noqa: E402
    ConnectorError,
    ConnectorRequirementError,
    activate_connector,
    deactivate_connector,
    load_connector,
)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """catlingo - multilingual categories."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@cli.group()
def connector() -> None:
    """Inspect category connectors."""
    pass


@connector.command("validate")
@click.argument("name", required=False)
def connector_validate(name: str | None) -> None:
    """Check that connector NAME can be activated (default: configured one)."""
    name = name or get_settings().categories_connector
    console = Console()
    try:
        load_connector(name).validate_requirements()
    except ConnectorRequirementError as e:
        console.print(f"[red]Connector '{name}' cannot be loaded:[/] {e}")
        raise SystemExit(1) from e
    except ConnectorError as e:
        raise click.ClickException(str(e)) from e
    console.print(f"[green]Connector '{name}' requirements met[/]")


@connector.command("hooks")
@click.argument("name", required=False)
def connector_hooks(name: str | None) -> None:
    """Activate connector NAME and list the hooks it installs."""
    try:
        active = activate_connector(name)
    except ConnectorError as e:
        raise click.ClickException(str(e)) from e

    try:
        registrations = active.registry.registrations()
        console = Console()
        if not registrations:
            console.print(f"[yellow]Connector '{active.name}' installs no hooks.[/]")
            return

        table = Table(title=f"Hooks installed by '{active.name}'")
        table.add_column("Host class", style="cyan")
        table.add_column("Hook")
        table.add_column("Source", style="dim")
        for registration in registrations:
            table.add_row(registration.target.__name__, registration.name, registration.source)
        console.print(table)
        console.print(f"{len(registrations)} hooks")
    finally:
        deactivate_connector()


@cli.command("serve")
def serve() -> None:
    """Run the admin API with the configured connector."""
    from catlingo.admin.main import main

    main()


if __name__ == "__main__":
    cli()
