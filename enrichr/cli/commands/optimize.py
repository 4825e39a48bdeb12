"""Optimize command - enrich one article with competitor content."""

from typing import Optional

import click

from enrichr.cli.colors import (
    console,
    print_error,
    print_header,
    print_key_value,
    print_success,
    print_warning,
)
from enrichr.pipeline.orchestrator import EnrichmentOrchestrator, RunStatus
from enrichr.storage import create_store


@click.command()
@click.option("--article-id", type=int, default=None, help="Article to optimize (default: latest published)")
@click.option("--json", "json_output", is_flag=True, help="Output the run summary as JSON")
@click.pass_context
def optimize(ctx: click.Context, article_id: Optional[int], json_output: bool):
    """Rewrite an article using the top competitor articles for its title.

    Exits with status 1 only for configuration errors; runs that end early
    (no article, nothing found to learn from) exit with status 0.

    Examples:
        enrichr optimize
        enrichr optimize --article-id 42 --json
    """
    config = ctx.obj["config"]
    store = create_store(config.store, timeout=config.scrape.timeout)
    summary = EnrichmentOrchestrator(config, store).run(article_id=article_id)

    if json_output:
        console.print_json(data=summary.to_dict())
    elif summary.status == RunStatus.ENRICHED:
        print_header("Optimization complete")
        print_key_value("Article", f"{summary.article_id} ({summary.title})")
        print_key_value("Competitors", summary.competitors)
        print_key_value("Tokens used", summary.tokens_used)
        for index, ref in enumerate(summary.references, 1):
            print_key_value(f"Reference {index}", f"{ref.title} ({ref.url})")
        for issue in summary.issues:
            print_warning(f"Validation: {issue}")
        print_success(f"Article {summary.article_id} updated")
    elif summary.status == RunStatus.CONFIG_ERROR:
        print_error(f"Configuration error: {summary.reason}")
    else:
        print_warning(f"No enrichment ({summary.stage.value}): {summary.reason}")

    if summary.status == RunStatus.CONFIG_ERROR:
        ctx.exit(1)
