"""Clean command - strip layout residue from stored article content."""

import click

from enrichr.cli.colors import print_info, print_success
from enrichr.pipeline.maintenance import clean_stored_articles
from enrichr.storage import create_store


@click.command()
@click.option("--dry-run", is_flag=True, help="Show what would change without writing")
@click.pass_context
def clean(ctx: click.Context, dry_run: bool):
    """Remove trailing share counts and extra whitespace from stored articles."""
    config = ctx.obj["config"]
    store = create_store(config.store, timeout=config.scrape.timeout)

    changed = clean_stored_articles(store, dry_run=dry_run)
    for article in changed:
        print_info(f"{'Would clean' if dry_run else 'Cleaned'}: {article.title}")

    print_success(f"Done. {'Would clean' if dry_run else 'Cleaned'} {len(changed)} article(s).")
