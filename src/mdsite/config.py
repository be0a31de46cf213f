"""Site configuration: _config.yml schema and loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mdsite.errors import FilesystemError, ParseError


CONFIG_FILE = "_config.yml"
ENV_PREFIX = "MDSITE_"


class SiteConfig(BaseModel):
    """Recognized build options; any other _config.yml key passes through to site.config."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    post_link:         str = Field(default="${name}.html", alias="postLink", description="URL template for posts")
    post_file_name:    str = Field(default="${url}", alias="postFileName", description="Output path template for posts")
    exclude:           list[str] = Field(default_factory=list, description="Path prefixes skipped by the walk")
    markdown_renderer: Optional[str] = Field(default=None, alias="markdownRenderer", description="Alternate renderer module")
    markdown_preset:   str = Field(default="gfm-like", alias="markdownPreset", description="MarkdownIt preset name")

    def as_context(self) -> dict[str, Any]:
        """Mapping exposed to templates as site.config, keyed as in _config.yml."""
        return self.model_dump(by_alias=True)


_ENV_FIELDS = ("post_link", "post_file_name", "markdown_renderer", "markdown_preset")


def _alias(name: str) -> str:
    """_config.yml spelling of a SiteConfig field name; unknown names pass through."""
    field = SiteConfig.model_fields.get(name)
    return (field.alias if field else None) or name


def load_config(root: Path = Path("."), overrides: dict[str, Any] = None) -> SiteConfig:
    """Load SiteConfig from _config.yml, then MDSITE_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    path = root / CONFIG_FILE
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ParseError(f"Invalid {CONFIG_FILE}: {e}", path) from e
        except OSError as e:
            raise FilesystemError(f"Cannot read {CONFIG_FILE}: {e}", path) from e
        if not isinstance(data, dict):
            raise ParseError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}", path)

    for name in _ENV_FIELDS:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[_alias(name)] = val

    if overrides:
        data.update({
            _alias(k): v
            for k, v in overrides.items() if v is not None
        })
    try:
        return SiteConfig.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Invalid {CONFIG_FILE}: {e}", path) from e
