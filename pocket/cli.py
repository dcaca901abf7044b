"""
Command-line interface for Prompt Pocket.
"""
import logging

import click

from pocket.commands.config import config
from pocket.commands.data import export_data, import_data, list_tree, reset_data, search
from pocket.commands.group import group
from pocket.commands.prompt import prompt
from pocket.constants import DATA_DIR_ENV_VAR


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    envvar=DATA_DIR_ENV_VAR,
    help=f"Data directory (default: ${DATA_DIR_ENV_VAR} or ~/.prompt-pocket).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, data_dir, verbose):
    """Keep reusable prompts organized in nested groups."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"data_dir": data_dir}


cli.add_command(group)
cli.add_command(prompt)
cli.add_command(list_tree)
cli.add_command(search)
cli.add_command(export_data)
cli.add_command(import_data)
cli.add_command(reset_data)
cli.add_command(config)


if __name__ == '__main__':
    cli()
