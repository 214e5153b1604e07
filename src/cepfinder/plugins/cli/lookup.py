"""
CLI command: lookup

Resolves one postal code by racing every registered provider.
"""

import json
import logging

import click

from cepfinder.address import AddressLookupError, AddressService

# Configure module-level logger
logger = logging.getLogger("cepfinder.cli.lookup")


@click.command("lookup")
@click.argument("postal_code", type=click.STRING)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Deadline in seconds (defaults to CEPFINDER_REQUEST_TIMEOUT)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def cli(postal_code: str, timeout: float, as_json: bool) -> None:
    """
    Resolve POSTAL_CODE to an address using the first provider to answer.
    """
    try:
        result = AddressService(timeout=timeout).execute(postal_code)
    except AddressLookupError as e:
        logger.debug("Lookup for %s failed: %s", postal_code, e)
        click.echo(f"Error: {e}", err=True)
        raise click.exceptions.Exit(1)

    if as_json:
        click.echo(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
        return

    click.echo(f"Source:       {result.source}")
    click.echo(f"Postal code:  {result.postal_code}")
    click.echo(f"Street:       {result.street}")
    click.echo(f"Neighborhood: {result.neighborhood}")
    click.echo(f"City:         {result.city}")
    click.echo(f"State:        {result.state}")
