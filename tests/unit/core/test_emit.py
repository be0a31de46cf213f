"""Unit tests for core/emit.py"""

import pytest

from mdsite.config import SiteConfig
from mdsite.core.emit import (
    SiteEmitter,
    ensure_directories,
    is_excluded,
    read_parsed,
    reset_output,
)
from mdsite.core.markdown import default_renderer
from mdsite.core.templates import LayoutCache, TemplateRegistry, build_site_context


@pytest.fixture(name="emitter")
def emitter_fixture(tmp_path):
    config = SiteConfig()
    layouts = tmp_path / "_layouts"
    layouts.mkdir()
    (layouts / "default.html").write_text("<body>{{ content }}</body>")
    (layouts / "feed.xml").write_text("<feed>{{ name }}|{{ url }}</feed>")
    (layouts / "raw.").write_text("{{ content }}")
    registry = TemplateRegistry(tmp_path, build_site_context([], {}, config), LayoutCache())
    return SiteEmitter(tmp_path, config, registry, default_renderer())


# --- helpers ---

def test_ensure_directories_creates_missing_parents(tmp_path):
    out = tmp_path / "a" / "b" / "c.html"
    ensure_directories(out)
    assert (tmp_path / "a" / "b").is_dir()
    assert not out.exists()
    ensure_directories(out)  # already present: no error


def test_reset_output_removes_tree(tmp_path):
    out = tmp_path / "_site"
    (out / "old").mkdir(parents=True)
    (out / "old" / "stale.html").write_text("x")
    reset_output(out)
    assert not out.exists()
    reset_output(out)  # absent: no error


def test_is_excluded_prefix_match():
    assert is_excluded("./drafts/wip.md", ["drafts"])
    assert is_excluded("./README.md", ["README"])
    assert not is_excluded("./posts/a.md", ["drafts"])
    assert not is_excluded("./a.md", [])


def test_is_excluded_keeps_starts_with_quirks():
    """Matching is a plain prefix test on the path after the fixed 2-char './' prefix.

    A sibling sharing the prefix is excluded too, and a nested directory with
    the excluded name is not.
    """
    assert is_excluded("./drafts-old/a.md", ["drafts"])
    assert not is_excluded("./blog/drafts/a.md", ["drafts"])
    assert is_excluded("./anything", [""])


def test_read_parsed_plain_text_is_static(tmp_path):
    f = tmp_path / "a.txt"
    f.write_text("hello")
    assert read_parsed(f) is None


def test_read_parsed_binary_is_static(tmp_path):
    f = tmp_path / "b.bin"
    f.write_bytes(b"---\n\xff\xfe\x00")
    assert read_parsed(f) is None


def test_read_parsed_document(tmp_path):
    f = tmp_path / "p.md"
    f.write_text("---\ntitle: T\n---\nbody")
    parsed = read_parsed(f)
    assert parsed.metadata == {"title": "T"}
    assert parsed.body == "body"


# --- SiteEmitter.emit_file ---

def test_static_file_copied_byte_for_byte(tmp_path, emitter):
    data = b"\x00\x01binary\r\n\xff"
    (tmp_path / "img").mkdir()
    src = tmp_path / "img" / "x.png"
    src.write_bytes(data)
    emitter.emit_file(src, "./img/x.png", read_parsed(src))
    assert (tmp_path / "_site" / "img" / "x.png").read_bytes() == data
    assert emitter.result.copied == [(src, tmp_path / "_site" / "img" / "x.png")]


def test_markdown_document_rendered_to_html(tmp_path, emitter):
    src = tmp_path / "about.md"
    src.write_text("---\ntitle: About\n---\n*hi*")
    emitter.emit_file(src, "./about.md", read_parsed(src))
    out = tmp_path / "_site" / "about.html"
    assert out.read_text() == "<body><p><em>hi</em></p>\n</body>"
    assert not (tmp_path / "_site" / "about.md").exists()


def test_layout_extension_wins(tmp_path, emitter):
    """A document using feed.xml is written with .xml; name and url are set."""
    src = tmp_path / "feed.html"
    src.write_text("---\nlayout: feed.xml\n---\nignored")
    emitter.emit_file(src, "./feed.html", read_parsed(src))
    assert (tmp_path / "_site" / "feed.xml").read_text() == "<feed>feed|./feed.html</feed>"


def test_html_document_body_not_markdown_rendered(tmp_path, emitter):
    src = tmp_path / "page.html"
    src.write_text("---\n---\n*raw*")
    emitter.emit_file(src, "./page.html", read_parsed(src))
    assert (tmp_path / "_site" / "page.html").read_text() == "<body>*raw*</body>"


def test_layout_without_extension_strips_output_extension(tmp_path, emitter):
    src = tmp_path / "notes.txt"
    src.write_text("---\nlayout: raw.\n---\ntext")
    emitter.emit_file(src, "./notes.txt", read_parsed(src))
    assert (tmp_path / "_site" / "notes").read_text() == "text"
