"""
CLI command: config

Configuration management commands.
"""

import click

from cepfinder.settings import Settings


@click.group("config")
def cli():
    """
    Configuration management commands.
    """
    pass


@cli.command("show")
def show_config():
    """
    Show current configuration.
    """
    settings = Settings()

    click.echo("cepfinder Configuration")
    click.echo("=" * 30)
    click.echo(f"Request Timeout: {settings.request_timeout}s")
    click.echo(f"User Agent: {settings.user_agent}")
    click.echo(f"Providers File: {settings.providers_file or '(packaged)'}")
    click.echo(f"Log Level: {settings.log_level}")
