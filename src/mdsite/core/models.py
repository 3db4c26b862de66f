"""Intermediate data models for the read, render, and assemble pipeline"""

import datetime as dt
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A source document: front matter plus raw Markdown body. Immutable once read."""
    model_config = ConfigDict(frozen=True)

    path:     Path
    layout:   Optional[str] = None
    title:    Optional[str] = None
    date:     Optional[dt.date] = None
    metadata: dict[str, Any] = Field(default_factory=dict)   # full front-matter mapping
    body:     str = ""


class Heading(BaseModel):
    """A rendered heading, collected for tables of contents."""
    level:  int
    text:   str
    anchor: str


class RenderedBody(BaseModel):
    """Output of the Markdown renderer for one document body."""
    html:     str
    headings: list[Heading] = Field(default_factory=list)
    excerpt:  str = ""


class RenderedPage(BaseModel):
    """A document wrapped in its layout, ready to be written."""
    source:      Path
    layout:      str
    html:        str                # final assembled document
    content:     str                # body HTML before layout
    metadata:    dict[str, Any] = Field(default_factory=dict)
    output_path: Path               # relative to the output directory


class BuildStatus(str, Enum):
    rendered = "rendered"
    failed = "failed"


class BuildResult(BaseModel):
    """Outcome of processing one source document."""
    source:      Path
    status:      BuildStatus
    hash:        Optional[str] = None
    output_path: Optional[Path] = None
    error_kind:  Optional[str] = None
    error:       Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == BuildStatus.rendered
