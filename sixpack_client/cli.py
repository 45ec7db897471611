"""
Sixpack CLI

Command-line access to a Sixpack server, handy for checking an experiment
setup or forcing an alternative while debugging.

    sixpack participate button-color blue green --client-id abc
    sixpack convert button-color --client-id abc --kpi signup
"""

from typing import Optional, Tuple
import click
from rich.console import Console
from rich.table import Table
from sixpack_client.client import Client
from sixpack_client.core.config import settings
from sixpack_client.core.exceptions import SixpackError, ValidationError
from sixpack_client.core.logging import setup_logging
from sixpack_client.models import Outcome
from sixpack_client.options import (
    with_alternatives,
    with_client_id,
    with_force,
    with_ip_address,
    with_kpi,
    with_traffic_fraction,
    with_user_agent,
)

console = Console()


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--base-url', '-u', default=None, help='Sixpack server URL (default: SIXPACK_BASE_URL)')
@click.pass_context
def cli(ctx, verbose, base_url):
    """Sixpack CLI - participate in and convert Sixpack experiments."""
    ctx.ensure_object(dict)
    setup_logging(level='DEBUG' if verbose else settings.log_level)
    ctx.obj['base_url'] = base_url or settings.base_url


def _client(ctx) -> Client:
    try:
        return Client(ctx.obj['base_url'])
    except SixpackError as e:
        raise click.ClickException(str(e))


def _render(outcome: Outcome, title: str) -> None:
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Alternative", outcome.alternative or "-")
    if outcome.response is not None:
        response = outcome.response
        table.add_row("Status", response.status or "-")
        table.add_row("Client ID", response.client_id or "-")
        table.add_row("Experiment", response.experiment_name or "-")
        table.add_row("Version", str(response.experiment_version) if response.experiment_version is not None else "-")
    console.print(table)

    if outcome.error is not None:
        console.print(f"[red]Error:[/red] {outcome.error}")


@cli.command()
@click.argument('experiment')
@click.argument('alternatives', nargs=-1, required=True)
@click.option('--client-id', '-c', default=None, help='Visitor id (generated when omitted)')
@click.option('--traffic-fraction', '-t', type=float, default=None, help='Traffic fraction (0-1)')
@click.option('--force', '-f', default=None, help='Force an alternative')
@click.option('--ip-address', default=None, help='Visitor IP address')
@click.option('--user-agent', default=None, help='Visitor user agent')
@click.pass_context
def participate(
    ctx,
    experiment: str,
    alternatives: Tuple[str, ...],
    client_id: Optional[str],
    traffic_fraction: Optional[float],
    force: Optional[str],
    ip_address: Optional[str],
    user_agent: Optional[str],
):
    """Assign a visitor to one of ALTERNATIVES of EXPERIMENT."""
    options = [
        with_alternatives(*alternatives),
        with_client_id(client_id),
        with_ip_address(ip_address),
        with_user_agent(user_agent),
    ]
    if traffic_fraction is not None:
        options.append(with_traffic_fraction(traffic_fraction))
    if force:
        options.append(with_force(force))

    with _client(ctx) as client:
        try:
            outcome = client.participate(experiment, *options)
        except ValidationError as e:
            raise click.BadParameter(str(e))

    _render(outcome, f"participate: {experiment}")
    if outcome.error is not None:
        ctx.exit(1)


@cli.command()
@click.argument('experiment')
@click.option('--client-id', '-c', required=True, help='Visitor id')
@click.option('--kpi', '-k', default=None, help='KPI name')
@click.option('--ip-address', default=None, help='Visitor IP address')
@click.option('--user-agent', default=None, help='Visitor user agent')
@click.pass_context
def convert(
    ctx,
    experiment: str,
    client_id: str,
    kpi: Optional[str],
    ip_address: Optional[str],
    user_agent: Optional[str],
):
    """Record a conversion for a visitor in EXPERIMENT."""
    options = [
        with_client_id(client_id),
        with_ip_address(ip_address),
        with_user_agent(user_agent),
        with_kpi(kpi),
    ]

    with _client(ctx) as client:
        try:
            outcome = client.convert(experiment, *options)
        except ValidationError as e:
            raise click.BadParameter(str(e))

    _render(outcome, f"convert: {experiment}")
    if outcome.error is not None:
        ctx.exit(1)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
