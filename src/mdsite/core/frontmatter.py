"""Front matter splitting: a YAML header between '---' lines at the top of a file"""

from pathlib import Path
from typing import Optional

import yaml

from mdsite.core.models import ParsedDocument
from mdsite.errors import FilesystemError, ParseError


OPEN_DELIM = "---\n"
CLOSE_DELIM = "\n---\n"


def split_front_matter(text: str, path: Optional[Path] = None) -> ParsedDocument:
    """Return the parsed header and remaining body of text.

    A missing opening delimiter, or one never closed, is not an error: the
    whole text comes back as body with metadata None. An empty header gives {}.
    """
    if not text.startswith(OPEN_DELIM):
        return ParsedDocument(metadata=None, body=text)
    end = text.find(CLOSE_DELIM)
    if end == -1:
        return ParsedDocument(metadata=None, body=text)

    header = text[len(OPEN_DELIM):end + 1]
    try:
        metadata = yaml.safe_load(header) or {}
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML front matter: {e}", path) from e
    if not isinstance(metadata, dict):
        raise ParseError(
            f"Invalid YAML front matter: expected a mapping, got {type(metadata).__name__}", path
        )
    return ParsedDocument(metadata=metadata, body=text[end + len(CLOSE_DELIM):])


def read_document(path: Path) -> ParsedDocument:
    """Read a UTF-8 file and split its front matter."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"Cannot read file: {e}", path) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"Not valid UTF-8 text: {e}", path) from e
    return split_front_matter(text, path)
