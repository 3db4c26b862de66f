"""Content store: source discovery and reading documents with front matter"""

import datetime as dt
import logging
from pathlib import Path
from typing import Any

from mdsite.core.errors import MalformedFrontMatter, UnreadableFile
from mdsite.core.frontmatter import parse_frontmatter
from mdsite.core.models import Document


logger = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.markdown'}


def discover_files(path: Path) -> list[Path]:
    """Return sorted Markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS and p.is_file())


def read_text(path: Path) -> str:
    """Read a source file as UTF-8, mapping I/O and decode failures to UnreadableFile."""
    try:
        return path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise UnreadableFile(f"not valid UTF-8: {e.reason}", path) from e
    except OSError as e:
        raise UnreadableFile(e.strerror or str(e), path) from e


def _coerce_date(value: Any, path: Path) -> dt.date | None:
    """Normalize a front-matter date (YAML date, datetime, or ISO string) to a date."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(text).date()
    except ValueError as e:
        raise MalformedFrontMatter(f"invalid date {value!r}", path) from e


def parse_document(text: str, path: Path) -> Document:
    """Build a Document from raw file text."""
    metadata, body = parse_frontmatter(text, path)
    logger.debug("parsed %s: %d front-matter keys", path, len(metadata))
    layout = metadata.get('layout')
    title = metadata.get('title')
    return Document(
        path=path,
        layout=str(layout) if layout is not None else None,
        title=str(title) if title is not None else None,
        date=_coerce_date(metadata.get('date'), path),
        metadata=metadata,
        body=body,
    )

