import click

from evergreen.domain.exceptions import ConfigurationError
from evergreen.infrastructure.cli.catalog_commands import catalog_seed, trees_list
from evergreen.infrastructure.cli.shop_commands import shop
from evergreen.infrastructure.config import Settings
from evergreen.infrastructure.logging_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Evergreen Co.: fresh Christmas trees, delivered."""
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))

    configure_logging(settings.log_level, json=settings.log_json)
    ctx.obj = settings


# Register subcommands
cli.add_command(trees_list)
cli.add_command(catalog_seed)
cli.add_command(shop)
