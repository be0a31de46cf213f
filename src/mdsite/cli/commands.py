"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler

from mdsite.config import load_config
from mdsite.core.models import Post, TagIndex
from mdsite.core.pipeline import build_site, load_posts
from mdsite.errors import MdsiteError


SourceOpt = Annotated[Optional[Path], typer.Option("--source", "-s", help="Site root (default: current directory)")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Log every file handled")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _configure_logging(verbose: bool) -> None:
    """Send mdsite log records to a RichHandler; DEBUG when verbose, else WARNING."""
    handler = RichHandler(show_time=verbose, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("mdsite")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers = [handler]
    logger.propagate = False


def _root(source: Optional[Path]) -> Path:
    root = source or Path.cwd()
    if not root.is_dir():
        _fail(f"Source directory not found: {root}")
    return root


def _posts(root: Path) -> tuple[list[Post], TagIndex]:
    """Load config and posts with standard CLI error handling."""
    try:
        config = load_config(root)
        posts, tags = load_posts(root, config)
    except MdsiteError as e:
        _fail("Could not read posts", e)
    return posts, tags


def build_cmd(
    source: SourceOpt = None,
    post_link: Annotated[Optional[str], typer.Option("--post-link", help="Override postLink, e.g. '${name}/index.html'")] = None,
    post_file_name: Annotated[Optional[str], typer.Option("--post-file-name", help="Override postFileName")] = None,
    verbose: VerboseOpt = False,
    ):
    """Rebuild _site/ from posts, layouts, and the rest of the source tree."""
    _configure_logging(verbose)
    root = _root(source)
    try:
        result = build_site(root, overrides={"post_link": post_link, "post_file_name": post_file_name})
    except MdsiteError as e:
        _fail("Build failed", e)

    for name, out in result.written:
        typer.echo(f"  {name} -> {out.relative_to(root)}")
    typer.echo(
        f"Build complete - "
        f"{len(result.written)} post(s), "
        f"{len(result.rendered)} rendered, "
        f"{len(result.copied)} copied"
    )


def posts_cmd(source: SourceOpt = None):
    """List collected posts, newest first."""
    root = _root(source)
    posts, _ = _posts(root)
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for post in posts:
        target = f"link: {post.url}" if post.is_link else post.url
        typer.echo(f"{post.date.isoformat()}  {post.name}  {target}")


def tags_cmd(source: SourceOpt = None):
    """List tags with the number of posts carrying each."""
    root = _root(source)
    _, tags = _posts(root)
    if not tags:
        typer.echo("No tags found.")
        raise typer.Exit(1)
    for tag, tagged in sorted(tags.items()):
        typer.echo(f"{tag}  {len(tagged)}")
