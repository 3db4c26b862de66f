"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDSITE_"


class Settings(BaseModel):
    site_title:     str = Field(default="mdsite",    description="Site title exposed to layouts as site.title")
    content_dir:    str = Field(default="content",   description="Directory of source Markdown documents")
    output_dir:     str = Field(default="_site",     description="Directory for rendered HTML pages")
    layout_dir:     str = Field(default="_layouts",  description="Directory holding <name>.html layout templates")
    default_layout: str = Field(default="default",   description="Layout used when front matter names none")
    parser_config:  str = Field(default="gfm-like", pattern="^(gfm-like|commonmark)$", description="MarkdownIt preset name")
    heading_anchors: bool = Field(default=False, description="Add id attributes to rendered headings")
    db_url:         str = "sqlite:///mdsite.db"
    log_level:      str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings: {e}") from e
