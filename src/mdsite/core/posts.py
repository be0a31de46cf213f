"""Post collection: dated files under _posts/ parsed, rendered, and sorted newest first"""

import datetime
import html
import logging
import re
from pathlib import Path

from pydantic import ValidationError

from mdsite.config import SiteConfig
from mdsite.core.frontmatter import read_document
from mdsite.core.markdown import RenderFn
from mdsite.core.models import Post
from mdsite.core.utils.fill import fill_template
from mdsite.errors import ParseError


log = logging.getLogger(__name__)

POSTS_DIR = "_posts"
POST_NAME_RE = re.compile(r"^(\d{4})-(\d\d?)-(\d\d?)-(.+)\.(md|markdown|link|html)$")
LINK_HTML = '<p>Read this post at <a href="{url}">{url}</a>.</p>'


def post_url(config: SiteConfig, post: Post) -> str:
    """Fill the configured postLink template from the post's fields."""
    return fill_template(config.post_link, post.as_context())


def read_post(path: Path, config: SiteConfig, render_markdown: RenderFn) -> Post | None:
    """Build a Post from a _posts/ file, or None if the filename is not a dated post."""
    m = POST_NAME_RE.match(path.name)
    if not m:
        return None
    year, month, day, name, ext = m.groups()

    parsed = read_document(path)
    record = dict(parsed.metadata or {})
    try:
        record["date"] = datetime.date(int(year), int(month), int(day))
    except ValueError as e:
        raise ParseError(f"Invalid date in post filename: {e}", path) from e
    record["name"] = name

    if ext == "link":
        url = record.get("url")
        if not url:
            raise ParseError("Link post has no url in its front matter", path)
        escaped = html.escape(str(url))
        record["content"] = LINK_HTML.format(url=escaped)
        record["isLink"] = True
    else:
        record["content"] = render_markdown(parsed.body) if ext in ("md", "markdown") else parsed.body
        record["isLink"] = False

    try:
        post = Post.model_validate(record)
    except ValidationError as e:
        raise ParseError(f"Invalid post front matter: {e}", path) from e
    if not post.is_link:
        post = post.model_copy(update={"url": post_url(config, post)})
    return post


def collect_posts(root: Path, config: SiteConfig, render_markdown: RenderFn) -> list[Post]:
    """Read every dated post under root/_posts, sorted by date descending.

    A missing _posts directory gives an empty list. Posts sharing a date keep
    filename order, which is not a guaranteed ordering.
    """
    posts_dir = root / POSTS_DIR
    if not posts_dir.is_dir():
        log.debug("No %s directory; no posts collected", POSTS_DIR)
        return []

    posts = []
    for path in sorted(posts_dir.iterdir()):
        if not path.is_file():
            continue
        post = read_post(path, config, render_markdown)
        if post is None:
            log.debug("Skipping %s: not a dated post filename", path.name)
            continue
        posts.append(post)
    posts.sort(key=lambda p: p.date, reverse=True)
    log.info("Collected %d post(s)", len(posts))
    return posts
