"""Root test configuration: a small canonical site tree shared by build tests"""

from pathlib import Path

import pytest


SITE_FILES = {
    "_config.yml": "title: My Site\nexclude:\n  - drafts\n",
    "_layouts/default.html": "<html>{% include 'header' %}<main>{{ content }}</main></html>",
    "_layouts/post.html": (
        "<article><h1>{{ title }}</h1>{{ content }}"
        "<time>{{ dateFormat(date, '%B %d, %Y') }}</time></article>"
    ),
    "_includes/header.html": "<header>{{ site.config.title }}</header>",
    "_posts/2024-3-5-hello.md": "---\ntitle: Hi\ntags: a b\n---\n**hi**",
    "_posts/2023-12-1-older.html": "---\ntitle: Older\ntags: [b]\n---\n<p>old</p>",
    "_posts/2024-1-2-elsewhere.link": "---\ntitle: Elsewhere\nurl: http://x.com\ntags: a\n---\nignored",
    "_posts/notes.txt": "not a post",
    "index.html": "---\ntitle: Home\n---\n<p>welcome</p>",
    "about.md": "---\ntitle: About\n---\n# About me\n",
    "css/style.css": "body { color: red; }\n",
    "drafts/wip.md": "---\ntitle: WIP\n---\nunfinished\n",
    ".hidden": "secret\n",
}

BINARY_FILE = ("img/logo.png", b"\x89PNG\r\n\x1a\n\x00\xff\xfe")


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Write a {relative path: text} mapping under root."""
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


@pytest.fixture(name="site_root")
def site_root_fixture(tmp_path, monkeypatch):
    """The canonical site written to tmp_path, with MDSITE_* env vars cleared."""
    for name in ("POST_LINK", "POST_FILE_NAME", "MARKDOWN_RENDERER", "MARKDOWN_PRESET"):
        monkeypatch.delenv(f"MDSITE_{name}", raising=False)
    write_tree(tmp_path, SITE_FILES)
    rel, data = BINARY_FILE
    (tmp_path / rel).parent.mkdir(parents=True)
    (tmp_path / rel).write_bytes(data)
    return tmp_path
