"""Data models shared by the collection, templating, and emit stages"""

from dataclasses import dataclass, field
import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class ParsedDocument:
    """A content file split into its metadata header and body.

    metadata is None iff the file has no recognized header block.
    """
    metadata: Optional[dict[str, Any]]
    body: str


class Post(BaseModel):
    """A dated entry from _posts/: its front matter plus the derived fields."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    date:    datetime.date            # from the filename, never from metadata
    name:    str                      # slug part of the filename
    tags:    list[str] = Field(default_factory=list)
    content: str = ""
    url:     Optional[str] = None
    is_link: bool = Field(default=False, alias="isLink")
    layout:  Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        """Accept a missing value, a whitespace-delimited string, or a sequence."""
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        if isinstance(value, (list, tuple)):
            return [str(t) for t in value]
        raise ValueError(f"tags must be a string or a list, got {type(value).__name__}")

    @field_validator("layout", mode="before")
    @classmethod
    def _layout_as_str(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    def as_context(self) -> dict[str, Any]:
        """Template-facing mapping of every field, using front matter spelling."""
        return self.model_dump(by_alias=True)


TagIndex = dict[str, list[Post]]


@dataclass
class BuildResult:
    """What one build produced. written pairs post name with output path; the others pair source with output."""
    posts:     list[Post] = field(default_factory=list)
    tags:      TagIndex = field(default_factory=dict)
    written:   list[tuple[str, Path]] = field(default_factory=list)
    rendered:  list[tuple[Path, Path]] = field(default_factory=list)
    copied:    list[tuple[Path, Path]] = field(default_factory=list)
