"""Main CLI application entry point."""
import click
from iabroker import __version__
from iabroker.config import config
from iabroker.utils.log import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Log level (default: from config)")
@click.pass_context
def cli(ctx, log_level):
    """iabroker - resolve satellite scenes to band URLs and pick the best scene."""
    ctx.ensure_object(dict)
    setup_logging(log_level or config.log_level, config.log_format)


# Import command modules
from iabroker.cli import catalog, scenes, search

# Register command groups
cli.add_command(catalog.catalog_group)
cli.add_command(scenes.resolve)
cli.add_command(scenes.metadata)
cli.add_command(scenes.activate)
cli.add_command(search.search)
cli.add_command(search.best_scene)


if __name__ == "__main__":
    cli()
