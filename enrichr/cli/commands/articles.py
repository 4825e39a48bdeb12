"""Articles command - list stored articles."""

import click

from enrichr.cli.colors import console, print_article_table, print_info
from enrichr.storage import create_store


@click.command()
@click.option("--limit", "-n", default=20, show_default=True, help="Number of articles to show")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def articles(ctx: click.Context, limit: int, json_output: bool):
    """List stored articles, latest published first."""
    config = ctx.obj["config"]
    store = create_store(config.store, timeout=config.scrape.timeout)
    items = store.list_articles(limit=limit)

    if json_output:
        console.print_json(data=[article.to_dict() for article in items])
        return

    if not items:
        print_info("No articles stored yet. Run 'enrichr ingest' first.")
        return

    print_article_table(items)
