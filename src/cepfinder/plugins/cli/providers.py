"""
CLI command: providers

Lists the providers raced for every lookup.
"""

import logging

import click

from cepfinder.address import AddressLookupError, load_provider_configs
from cepfinder.address.registry import list_fetcher_types
from cepfinder.settings import settings

logger = logging.getLogger("cepfinder.cli.providers")


@click.command("providers")
def cli() -> None:
    """
    List registered lookup providers in launch order.
    """
    try:
        configs = load_provider_configs(settings.providers_file)
    except AddressLookupError as e:
        logger.debug("Failed to load providers: %s", e)
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    if not configs:
        click.echo("No providers registered.")
        return

    fetcher_types = list_fetcher_types()

    click.echo("Registered providers:")
    for config in configs:
        fetcher_type = config.fetcher_type
        if fetcher_type not in fetcher_types:
            fetcher_type += ", unknown type: default fetcher"
        click.echo(
            f"  - {config.id}: {config.name} [{fetcher_type}] ({config.url_template})"
        )
