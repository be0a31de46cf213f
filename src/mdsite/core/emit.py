"""Site emitter: writes posts, then mirrors the source tree into _site/"""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from mdsite.config import SiteConfig
from mdsite.core.frontmatter import split_front_matter
from mdsite.core.markdown import RenderFn, is_markdown
from mdsite.core.models import BuildResult, ParsedDocument, Post
from mdsite.core.templates import TemplateRegistry
from mdsite.core.utils.fill import fill_template
from mdsite.errors import FilesystemError


log = logging.getLogger(__name__)

OUTPUT_DIR = "_site"
RESERVED_PREFIXES = ("_", ".")
DEFAULT_POST_LAYOUT = "post.html"
DEFAULT_DOC_LAYOUT = "default.html"
# Walk paths look like "./dir/file"; exclusion compares what follows this many chars.
EXCLUDE_PREFIX_LEN = 2


def ensure_directories(path: Path) -> None:
    """Create the missing parent directories of path, one level at a time."""
    for parent in reversed(path.parents):
        if parent.is_dir():
            continue
        try:
            parent.mkdir()
        except OSError as e:
            raise FilesystemError(f"Cannot create directory: {e}", parent) from e


def reset_output(output_dir: Path) -> None:
    """Remove a previous output tree, if any."""
    if not output_dir.exists():
        return
    try:
        shutil.rmtree(output_dir)
    except OSError as e:
        raise FilesystemError(f"Cannot remove output directory: {e}", output_dir) from e
    log.debug("Removed previous %s", output_dir)


def is_excluded(candidate: str, exclude: list[str]) -> bool:
    """True if candidate, minus its fixed-width prefix, starts with any exclusion."""
    stripped = candidate[EXCLUDE_PREFIX_LEN:]
    return any(stripped.startswith(e) for e in exclude)


def read_parsed(path: Path) -> Optional[ParsedDocument]:
    """Split the front matter of path, or None when it can only be copied verbatim."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise FilesystemError(f"Cannot read file: {e}", path) from e
    if not raw.startswith(b"---\n"):
        return None
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return None
    parsed = split_front_matter(text, path)
    return parsed if parsed.metadata is not None else None


class SiteEmitter:
    """Writes one build's output tree under root/_site."""

    def __init__(
        self,
        root: Path,
        config: SiteConfig,
        registry: TemplateRegistry,
        render_markdown: RenderFn,
        result: Optional[BuildResult] = None,
        ):
        self.root = root
        self.output_dir = root / OUTPUT_DIR
        self.config = config
        self.registry = registry
        self.render_markdown = render_markdown
        self.result = result if result is not None else BuildResult()

    def emit_posts(self, posts: list[Post]) -> None:
        """Render every non-link post through its layout. Link posts are never written."""
        for post in posts:
            if post.is_link:
                log.debug("Not writing link post %s", post.name)
                continue
            fields = post.as_context()
            out = self.output_dir / fill_template(self.config.post_file_name, fields).lstrip("/")
            layout = self.registry.get_layout(post.layout or DEFAULT_POST_LAYOUT)
            self._write(out, layout(fields))
            self.result.written.append((post.name, out))
        log.info("Wrote %d post(s)", len(self.result.written))

    def walk(self, directory: str = "./") -> None:
        """Recursively emit every non-reserved, non-excluded entry under directory."""
        try:
            names = sorted(os.listdir(self.root / directory))
        except OSError as e:
            raise FilesystemError(f"Cannot list directory: {e}", self.root / directory) from e

        for name in names:
            if name.startswith(RESERVED_PREFIXES):
                continue
            candidate = directory + name
            if is_excluded(candidate, self.config.exclude):
                log.debug("Excluded %s", candidate)
                continue
            path = self.root / candidate
            if path.is_dir():
                self.walk(candidate + "/")
            else:
                self.emit_file(path, candidate, read_parsed(path))

    def emit_file(self, path: Path, candidate: str, parsed: Optional[ParsedDocument]) -> None:
        """Render path through its layout if it has front matter, else copy it."""
        out = self.output_dir / candidate
        if parsed is None:
            ensure_directories(out)
            try:
                shutil.copyfile(path, out)
            except OSError as e:
                raise FilesystemError(f"Cannot copy file: {e}", path) from e
            self.result.copied.append((path, out))
            log.debug("Copied %s", candidate)
            return

        doc = dict(parsed.metadata)
        layout = self.registry.get_layout(str(doc.get("layout") or DEFAULT_DOC_LAYOUT))
        doc["content"] = self.render_markdown(parsed.body) if is_markdown(path) else parsed.body
        doc["name"] = path.stem
        doc["url"] = candidate
        if out.suffix:
            out = out.with_suffix(layout.extension)
        self._write(out, layout(doc))
        self.result.rendered.append((path, out))
        log.debug("Rendered %s -> %s", candidate, out)

    def _write(self, out: Path, text: str) -> None:
        ensure_directories(out)
        try:
            out.write_text(text, encoding="utf-8")
        except OSError as e:
            raise FilesystemError(f"Cannot write file: {e}", out) from e
