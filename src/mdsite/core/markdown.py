"""Markdown render-function selection: markdown-it by default, or a user module"""

import importlib
import importlib.util
import logging
from pathlib import Path
from typing import Callable, Optional

from markdown_it import MarkdownIt

from mdsite.errors import MissingResourceError


log = logging.getLogger(__name__)

RenderFn = Callable[[str], str]
MD_SUFFIXES = {".md", ".markdown"}


def is_markdown(path: Path) -> bool:
    """True if path has a .md or .markdown extension."""
    return path.suffix in MD_SUFFIXES


def default_renderer(preset: str = "gfm-like") -> RenderFn:
    """Build a markdown-it render function for the given preset name."""
    md = MarkdownIt(preset, options_update={"linkify": False})
    return md.render


def _load_module(name: str, root: Path):
    """Import name as a file path relative to root, falling back to a dotted module name."""
    path = root / name
    if path.is_file():
        mod_spec = importlib.util.spec_from_file_location(f"mdsite_renderer_{path.stem}", path)
        if mod_spec is None or mod_spec.loader is None:
            raise MissingResourceError("Cannot load markdown renderer module", path)
        module = importlib.util.module_from_spec(mod_spec)
        mod_spec.loader.exec_module(module)
        return module
    try:
        return importlib.import_module(name)
    except ImportError as e:
        raise MissingResourceError(f"Markdown renderer not found: {name}") from e


def get_renderer(module: Optional[str], root: Path, preset: str = "gfm-like") -> RenderFn:
    """Return the render function selected by config.

    module names a Python file (relative to root) or an importable module
    exposing render(text) -> str; None selects the markdown-it default.
    """
    if not module:
        log.debug("Using markdown-it renderer (preset=%s)", preset)
        return default_renderer(preset)

    render = getattr(_load_module(module, root), "render", None)
    if not callable(render):
        raise MissingResourceError(f"Markdown renderer {module!r} defines no render(text) function")
    log.debug("Using markdown renderer from %s", module)
    return render
