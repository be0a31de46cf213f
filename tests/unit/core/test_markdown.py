"""Unit tests for core/markdown.py"""

from pathlib import Path

import pytest

from mdsite.core.markdown import default_renderer, get_renderer, is_markdown
from mdsite.errors import MissingResourceError


def test_is_markdown():
    assert is_markdown(Path("a.md"))
    assert is_markdown(Path("dir/b.markdown"))
    assert not is_markdown(Path("c.html"))
    assert not is_markdown(Path("d.mdx"))


def test_default_renderer():
    assert default_renderer()("**hi**") == "<p><strong>hi</strong></p>\n"


def test_no_module_selects_default(tmp_path):
    assert get_renderer(None, tmp_path)("# T") == "<h1>T</h1>\n"


def test_renderer_from_file(tmp_path):
    (tmp_path / "shout.py").write_text("def render(text):\n    return text.upper()\n")
    assert get_renderer("shout.py", tmp_path)("hey") == "HEY"


def test_importable_module_without_render_raises(tmp_path):
    with pytest.raises(MissingResourceError, match="defines no render"):
        get_renderer("html", tmp_path)


def test_missing_renderer_raises(tmp_path):
    with pytest.raises(MissingResourceError, match="not found"):
        get_renderer("no_such_renderer_module", tmp_path)


def test_module_without_render_raises(tmp_path):
    (tmp_path / "empty.py").write_text("VALUE = 1\n")
    with pytest.raises(MissingResourceError, match="defines no render"):
        get_renderer("empty.py", tmp_path)
