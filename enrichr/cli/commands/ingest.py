"""Ingest command - store the oldest articles of a blog."""

from typing import Optional

import click

from enrichr.cli.colors import print_error, print_header, print_info, print_key_value, print_success
from enrichr.core.errors import EnrichrError
from enrichr.pipeline.ingest import BlogIngestor
from enrichr.storage import create_store


@click.command()
@click.option("--limit", "-n", default=5, show_default=True, help="Number of articles to ingest")
@click.option("--blog-url", default=None, help="Blog listing URL (overrides ENRICHR_BLOG_URL)")
@click.pass_context
def ingest(ctx: click.Context, limit: int, blog_url: Optional[str]):
    """Scrape the oldest articles from the blog into the store.

    Examples:
        enrichr ingest
        enrichr ingest --limit 10 --blog-url https://example.com/blog/
    """
    config = ctx.obj["config"]
    if blog_url:
        config = config.model_copy(update={"blog_url": blog_url})

    print_header(f"Ingesting {limit} article(s) from {config.blog_url}")

    store = create_store(config.store, timeout=config.scrape.timeout)
    try:
        summary = BlogIngestor(config, store).run(limit=limit)
    except EnrichrError as e:
        print_error(f"Ingestion failed: {e.message}")
        ctx.exit(1)

    if not summary.urls:
        print_info("No article links found on the last listing page.")
        return

    print_success("Ingestion completed")
    print_key_value("Saved", summary.saved)
    print_key_value("Skipped", summary.skipped)
    print_key_value("Failed", summary.failed)
