"""
enrichr CLI - ingest blog articles and enrich them with competitor content.

Examples:
    enrichr ingest --limit 5
    enrichr optimize
    enrichr articles --json
    enrichr clean
"""

import logging

import click
from pydantic import ValidationError

from enrichr import __version__
from enrichr.cli.colors import print_error
from enrichr.cli.commands import articles, clean, ingest, optimize
from enrichr.config import AppConfig
from enrichr.core.errors import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="enrichr")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """
    enrichr - Blog content extraction and enrichment.
    """
    try:
        config = AppConfig.from_env()
    except (ConfigurationError, ValidationError) as e:
        print_error(f"Invalid configuration: {e}")
        ctx.exit(1)

    level = logging.DEBUG if verbose or config.debug else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


cli.add_command(ingest.ingest)
cli.add_command(optimize.optimize)
cli.add_command(clean.clean)
cli.add_command(articles.articles)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
