"""bfdconf CLI.

Command-line interface for checking BFD configuration the way each
keepalived process role would read it.
Uses Click for command parsing and Rich for output formatting.
"""

import json
import logging
from pathlib import Path

import click
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from bfdconf.bfd.context import Role
from bfdconf.config import BfdConfSettings
from bfdconf.errors import BfdConfError
from bfdconf.loader import ConfigLoader, LoadResult

# Load .env file if present
load_dotenv()

console = Console()
err_console = Console(stderr=True)

ROLE_CHOICE = click.Choice([r.value for r in Role], case_sensitive=False)


def setup_logging(level: str) -> None:
    """Send library log records to stderr through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(error: BfdConfError) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {error.message}")
    if error.details:
        err_console.print(f"[dim]Details: {error.details}[/dim]")
    raise SystemExit(1)


@click.group()
@click.version_option(package_name="bfdconf")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to BFDCONF_LOG_LEVEL or INFO)",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """BFD instance configuration checker.

    Parses bfd_instance blocks of a keepalived-style configuration as
    the BFD, VRRP, checker or parent process would.
    """
    settings = BfdConfSettings()
    setup_logging(log_level or settings.log_level)
    ctx.obj = settings


def _instances_table(result: LoadResult) -> Table:
    table = Table(title="BFD Instances", show_header=True, header_style="bold cyan")
    table.add_column("Name")
    table.add_column("Neighbor")
    table.add_column("Source")
    table.add_column("min_rx (ms)", justify="right")
    table.add_column("min_tx (ms)", justify="right")
    table.add_column("idle_tx (ms)", justify="right")
    table.add_column("Mult", justify="right")
    table.add_column("TTL", justify="right")
    table.add_column("Max hops", justify="right")
    table.add_column("Passive")
    table.add_column("VRRP")
    table.add_column("Checker")

    for bfd in result.instances:
        table.add_row(
            bfd.name,
            str(bfd.neighbor_address),
            str(bfd.source_address) if bfd.source_address else "-",
            str(bfd.min_rx_ms),
            str(bfd.min_tx_ms),
            str(bfd.idle_tx_ms),
            str(bfd.detect_multiplier),
            str(bfd.ttl),
            "unlimited" if bfd.max_hops == -1 else str(bfd.max_hops),
            "yes" if bfd.passive else "no",
            "yes" if bfd.vrrp else "no",
            "yes" if bfd.checker else "no",
        )
    return table


def _tracked_table(result: LoadResult) -> Table:
    table = Table(
        title=f"BFD Instances Tracked by {result.role.value}",
        show_header=True,
        header_style="bold green",
    )
    table.add_column("Name")
    if result.role is Role.VRRP:
        table.add_column("Weight", justify="right")
        for tracked in result.vrrp_tracked:
            table.add_row(tracked.name, str(tracked.weight))
    else:
        for tracked in result.checker_tracked:
            table.add_row(tracked.name)
    return table


@main.command("check")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--role",
    "-r",
    type=ROLE_CHOICE,
    default=None,
    help="Process role to parse as (defaults to BFDCONF_ROLE or bfd)",
)
@click.pass_obj
def check(settings: BfdConfSettings, config_file: Path, role: str | None) -> None:
    """Parse a configuration file and show what a role builds.

    CONFIG_FILE: Path to the keepalived-style configuration file
    """
    try:
        loader = ConfigLoader(settings)
        result = loader.load(config_file, Role(role) if role else None)
    except BfdConfError as e:
        _fail(e)

    if result.role is Role.BFD:
        console.print(_instances_table(result))
        summary = f"{len(result.instances)} BFD instance(s)"
    elif result.role is Role.PARENT:
        summary = (
            "BFD instances configured"
            if result.have_bfd_instances
            else "No BFD instances configured"
        )
    else:
        console.print(_tracked_table(result))
        summary = f"{len(result.tracked)} tracked BFD instance(s)"

    console.print()
    console.print(
        Panel(
            f"[bold green]{summary}[/bold green]",
            title=f"{config_file} ({result.role.value})",
            border_style="green",
        )
    )


@main.command("dump")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option("--role", "-r", type=ROLE_CHOICE, default=None, help="Process role to parse as")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Output format",
)
@click.pass_obj
def dump(
    settings: BfdConfSettings,
    config_file: Path,
    role: str | None,
    output_format: str,
) -> None:
    """Print the parsed result as YAML or JSON.

    CONFIG_FILE: Path to the keepalived-style configuration file
    """
    try:
        loader = ConfigLoader(settings)
        result = loader.load(config_file, Role(role) if role else None)
    except BfdConfError as e:
        _fail(e)

    data = result.model_dump(mode="json")
    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)


@main.command("roles")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.pass_obj
def roles(settings: BfdConfSettings, config_file: Path) -> None:
    """Parse a file once per role and compare the results.

    Shows, per instance name, whether the BFD process builds it and
    whether the VRRP and checker processes track it.

    CONFIG_FILE: Path to the keepalived-style configuration file
    """
    try:
        loader = ConfigLoader(settings)
        results = loader.load_all(config_file)
    except BfdConfError as e:
        _fail(e)

    bfd_result = results[Role.BFD]
    consumers = [r for r in (Role.VRRP, Role.CHECKER) if r in results]

    names: list[str] = [bfd.name for bfd in bfd_result.instances]
    for role in consumers:
        for tracked in results[role].tracked:
            if tracked.name not in names:
                names.append(tracked.name)

    table = Table(title="BFD Instances by Role", show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("bfd")
    for role in consumers:
        table.add_column(role.value)

    for name in names:
        bfd = bfd_result.get_instance(name)
        row = [name, "[green]built[/green]" if bfd else "[red]dropped[/red]"]
        for role in consumers:
            tracked = results[role].get_tracked(name)
            row.append("[green]tracked[/green]" if tracked else "-")
        table.add_row(*row)

    console.print(table)
    parent = results[Role.PARENT]
    console.print(
        f"[dim]parent: {'BFD process needed' if parent.have_bfd_instances else 'no BFD process needed'}[/dim]"
    )


if __name__ == "__main__":
    main()
