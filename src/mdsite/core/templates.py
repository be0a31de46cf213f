"""Template registry: _includes/ partials and cached _layouts/ render functions.

Layouts are Jinja2 templates compiled from _layouts/<name>. Partials from
_includes/ are registered under their filename minus the last extension and
are reachable from layouts with {% include "name" %}. A compiled layout is a
Layout: calling it merges the shared site context with the per-document
context and renders.

The LayoutCache lives for one build and is passed in explicitly, so two
builds never share compiled layouts.
"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import DictLoader, Environment, Template, TemplateError, TemplateNotFound, TemplateSyntaxError

from mdsite.core.models import Post, TagIndex
from mdsite.core.utils.dates import date_format
from mdsite.config import SiteConfig
from mdsite.errors import FilesystemError, MissingResourceError, ParseError


log = logging.getLogger(__name__)

LAYOUTS_DIR = "_layouts"
INCLUDES_DIR = "_includes"
DEFAULT_LAYOUT_EXT = ".html"
LAYOUT_EXT_RE = re.compile(r"(\.\w+|)$")


class SiteEnvironment(Environment):
    """Jinja2 environment where p.key reads a mapping key before any attribute.

    Front matter keys such as copy or items would otherwise resolve to dict
    methods.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping) and attribute in obj:
            return obj[attribute]
        return super().getattr(obj, attribute)


def build_site_context(posts: list[Post], tags: TagIndex, config: SiteConfig) -> dict[str, Any]:
    """The read-only root context shared by every render in a build.

    Posts are exposed as plain mappings, and a post listed under site.tags is
    the same mapping as in site.posts.
    """
    by_id = {id(p): p.as_context() for p in posts}
    return {
        "site": {
            "posts": [by_id[id(p)] for p in posts],
            "tags": {tag: [by_id[id(p)] for p in tagged] for tag, tagged in tags.items()},
            "config": config.as_context(),
        },
        "dateFormat": date_format,
    }


def merge_context(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new context: base with overlay keys on top. base is never mutated.

    Top-level mapping values of base are copied so the result shares no
    top-level container with it.
    """
    merged = {k: dict(v) if isinstance(v, Mapping) else v for k, v in base.items()}
    merged.update(overlay)
    return merged


def layout_name(name: str) -> str:
    """Give name the default .html extension if it has none."""
    return name if "." in name else name + DEFAULT_LAYOUT_EXT


class Layout:
    """A compiled layout bound to the site context."""

    def __init__(self, filename: str, template: Template, context: Mapping[str, Any]):
        self.filename = filename
        self._template = template
        self._context = context

    @property
    def extension(self) -> str:
        """The layout's own extension ('.xml' for post.xml), or '' if it has none."""
        return LAYOUT_EXT_RE.search(self.filename).group(1)

    def __call__(self, context: Mapping[str, Any]) -> str:
        try:
            return self._template.render(merge_context(self._context, context))
        except TemplateNotFound as e:
            raise MissingResourceError(f"Partial not found: {e.name}", Path(LAYOUTS_DIR) / self.filename) from e
        except TemplateError as e:
            raise ParseError(f"Error rendering layout: {e}", Path(LAYOUTS_DIR) / self.filename) from e

    def __repr__(self) -> str:
        return f"Layout({self.filename!r})"


class LayoutCache:
    """Compiled layouts keyed by normalized name, for the lifetime of one build."""

    def __init__(self):
        self._layouts: dict[str, Layout] = {}

    def get(self, name: str) -> Layout | None:
        return self._layouts.get(name)

    def put(self, layout: Layout) -> None:
        self._layouts[layout.filename] = layout

    def __contains__(self, name: str) -> bool:
        return name in self._layouts

    def __len__(self) -> int:
        return len(self._layouts)


class TemplateRegistry:
    """Loads partials and compiles layouts from a site root."""

    def __init__(self, root: Path, context: Mapping[str, Any], cache: LayoutCache):
        self.root = root
        self.context = context
        self.cache = cache
        self.partials: dict[str, str] = {}
        self.env = SiteEnvironment(loader=DictLoader(self.partials), autoescape=False)
        self.env.filters["dateformat"] = date_format
        self._includes_loaded = False

    def load_includes(self) -> int:
        """Register every _includes/ file as a partial. Returns how many were registered."""
        self._includes_loaded = True
        includes_dir = self.root / INCLUDES_DIR
        if not includes_dir.is_dir():
            return 0
        for path in sorted(includes_dir.iterdir()):
            if not path.is_file():
                continue
            self.partials[path.stem] = _read_text(path)
            log.debug("Registered partial %r", path.stem)
        return len(self.partials)

    def get_layout(self, name: str) -> Layout:
        """Return the compiled layout for name, compiling and caching it on first use."""
        name = layout_name(name)
        cached = self.cache.get(name)
        if cached is not None:
            return cached
        if not self._includes_loaded:
            self.load_includes()

        path = self.root / LAYOUTS_DIR / name
        if not path.is_file():
            raise MissingResourceError(f"Layout not found: {name}", path)
        try:
            template = self.env.from_string(_read_text(path))
        except TemplateSyntaxError as e:
            raise ParseError(f"Invalid layout template: {e}", path) from e

        layout = Layout(name, template, self.context)
        self.cache.put(layout)
        log.debug("Compiled layout %r", name)
        return layout


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"Cannot read file: {e}", path) from e
