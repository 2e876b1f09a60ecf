"""blogkit CLI - build and inspect the published collection."""

from __future__ import annotations

import logging
from pathlib import Path

import click

DEFAULT_CONFIG = "blogkit.yaml"


def _load_config(config: str | None):
    from blogkit.config import load_config, load_env_overrides

    if config is None and Path(DEFAULT_CONFIG).exists():
        config = DEFAULT_CONFIG
    return load_env_overrides(load_config(config))


def _setup_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build(ctx: click.Context, config: str | None, base_dir: str, show_progress: bool):
    """Load config and build a snapshot, turning failures into a clean abort."""
    from blogkit.errors import PublishError
    from blogkit.pipeline.pipeline import PublishPipeline

    try:
        cfg = _load_config(config)
    except (FileNotFoundError, ValueError, TypeError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    _setup_logging(cfg.logging.level, ctx.obj.get("verbose", False))
    pipeline = PublishPipeline(config=cfg, base_dir=Path(base_dir))

    try:
        snapshot = pipeline.build(show_progress=show_progress)
    except PublishError as e:
        click.echo(f"✗ Build failed: {e}", err=True)
        raise click.Abort()

    return pipeline, snapshot


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """blogkit CLI - build and inspect the published collection."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--base-dir", "-d", default=".", help="Base directory for content and output")
@click.option("--progress/--no-progress", default=True, help="Show a progress bar")
@click.pass_context
def build(ctx: click.Context, config: str | None, base_dir: str, progress: bool):
    """Build the collection and write the export artifacts."""
    pipeline, snapshot = _build(ctx, config, base_dir, progress)
    outputs = pipeline.export(snapshot)

    posts = sum(1 for doc in snapshot if doc.is_post)
    click.echo(f"✓ Published {len(snapshot)} documents ({posts} posts, {len(snapshot) - posts} pages)")
    click.echo(f"  Tags: {len(snapshot.tag_index)}")
    for name, path in outputs.items():
        click.echo(f"  {name}: {path}")


@cli.command()
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--base-dir", "-d", default=".", help="Base directory for content")
@click.pass_context
def validate(ctx: click.Context, config: str | None, base_dir: str):
    """Validate configuration and content without writing anything."""
    pipeline, snapshot = _build(ctx, config, base_dir, show_progress=False)

    click.echo("✓ Content is valid")
    click.echo(f"  Content roots: {pipeline.config.content.content_roots}")
    click.echo(f"  Documents: {len(snapshot)}")
    click.echo(f"  Tags: {len(snapshot.tag_index)}")


@cli.command("list")
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--base-dir", "-d", default=".", help="Base directory for content")
@click.option("--kind", type=click.Choice(["post", "page"]), default="post", help="Layout kind")
@click.option("--page", "page_number", type=int, default=1, help="Page number (1-based)")
@click.option("--size", type=int, default=None, help="Items per page")
@click.pass_context
def list_documents(
    ctx: click.Context,
    config: str | None,
    base_dir: str,
    kind: str,
    page_number: int,
    size: int | None,
):
    """List documents newest first."""
    from blogkit.domain.document import LayoutKind
    from blogkit.errors import InvalidPage
    from blogkit.pipeline.feed import FeedGenerator

    pipeline, snapshot = _build(ctx, config, base_dir, show_progress=False)
    feed = FeedGenerator(snapshot)

    try:
        page = feed.page(page_number, size or pipeline.config.feed.page_size, LayoutKind(kind))
    except InvalidPage as e:
        raise click.BadParameter(str(e))

    for doc in page.items:
        date = doc.published_at.date().isoformat() if doc.published_at else "----------"
        click.echo(f"{date}  {doc.permalink}  {doc.title}")
    click.echo(f"Page {page.number}/{max(page.total_pages, 1)} ({page.total_items} total)")


@cli.command()
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--base-dir", "-d", default=".", help="Base directory for content")
@click.option("--tag", "-t", default=None, help="Show documents for one tag")
@click.pass_context
def tags(ctx: click.Context, config: str | None, base_dir: str, tag: str | None):
    """Show the tag index."""
    from blogkit.pipeline.feed import FeedGenerator

    _, snapshot = _build(ctx, config, base_dir, show_progress=False)
    feed = FeedGenerator(snapshot)

    if tag is None:
        for summary in feed.tags():
            click.echo(f"{summary.name} ({summary.count})")
        return

    docs = feed.by_tag(tag)
    if not docs:
        click.echo(f"No documents tagged {tag!r}")
    for doc in docs:
        click.echo(f"{doc.permalink}  {doc.title}")


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
