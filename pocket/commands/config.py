"""
Config command group for the Prompt Pocket CLI.

Settings are stored next to the prompt data in the data directory.
"""
import click

from pocket.commands.common import get_core, reporting_errors
from pocket.exceptions import ValidationError
from pocket.models.files import ConfigFile


@click.group()
def config():
    """View and edit settings."""
    pass


@config.command(name="show")
def show_config():
    """Show current configuration."""
    with reporting_errors():
        core = get_core()
        current = core.load_config()
    for key, value in current.model_dump().items():
        click.echo(f"{key} = {value}")


@config.command(name="get")
@click.argument("key")
def get_config(key):
    """Get a configuration value."""
    with reporting_errors():
        core = get_core()
        if key not in ConfigFile.model_fields:
            raise ValidationError(
                f"Unknown config key: '{key}'. "
                f"Valid keys are: {', '.join(ConfigFile.model_fields)}."
            )
        click.echo(getattr(core.load_config(), key))


@config.command(name="set")
@click.argument("key")
@click.argument("value")
def set_config(key, value):
    """Set a configuration value."""
    with reporting_errors():
        core = get_core()
        updated = core.set_config_value(key, value)
    click.echo(f"{key} = {getattr(updated, key)}")
