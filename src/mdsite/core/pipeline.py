"""Build orchestration: config -> posts -> tags -> templates -> output tree"""

import logging
from pathlib import Path
from typing import Any, Optional

from mdsite.config import SiteConfig, load_config
from mdsite.core.emit import SiteEmitter, reset_output
from mdsite.core.markdown import RenderFn, get_renderer
from mdsite.core.models import BuildResult, Post, TagIndex
from mdsite.core.posts import collect_posts
from mdsite.core.tags import gather_tags
from mdsite.core.templates import LayoutCache, TemplateRegistry, build_site_context


log = logging.getLogger(__name__)


def load_posts(
    root: Path,
    config: SiteConfig,
    render_markdown: Optional[RenderFn] = None,
    ) -> tuple[list[Post], TagIndex]:
    """Collect posts with render_markdown (default: the configured renderer) and index their tags."""
    if render_markdown is None:
        render_markdown = get_renderer(config.markdown_renderer, root, config.markdown_preset)
    posts = collect_posts(root, config, render_markdown)
    return posts, gather_tags(posts)


def build_site(root: Optional[Path] = None, overrides: dict[str, Any] = None) -> BuildResult:
    """Build root/_site from the source tree at root (default: the working directory).

    Any MdsiteError aborts the build where it happens; the output tree is
    left as far as it got.
    """
    root = Path.cwd() if root is None else Path(root)
    config = load_config(root, overrides)
    render_markdown = get_renderer(config.markdown_renderer, root, config.markdown_preset)

    posts, tags = load_posts(root, config, render_markdown)
    context = build_site_context(posts, tags, config)

    registry = TemplateRegistry(root, context, LayoutCache())
    n_partials = registry.load_includes()
    log.info("Registered %d partial(s)", n_partials)

    result = BuildResult(posts=posts, tags=tags)
    emitter = SiteEmitter(root, config, registry, render_markdown, result)
    reset_output(emitter.output_dir)
    emitter.emit_posts(posts)
    emitter.walk()

    log.info(
        "Build complete: %d post(s), %d rendered, %d copied",
        len(result.written), len(result.rendered), len(result.copied),
    )
    return result
