import logging
import os

import click

from bundle_kit import __version__
from bundle_kit.commands.install import install
from bundle_kit.commands.show import show

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

DEBUG_ENV_VAR = "BUNDLE_KIT_DEBUG"


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Install plugin bundles into a host tool's config directory."""
    # Enable debug logging if --debug or BUNDLE_KIT_DEBUG is set
    if debug or os.getenv(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(install)
cli.add_command(show)


def main() -> None:
    """CLI entry point used by the `bundle-kit` console script."""
    cli()


if __name__ == "__main__":
    main()
