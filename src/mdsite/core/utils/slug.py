"""Slug generation for page filenames and heading anchors"""

import re


DATE_PREFIX_RE = re.compile(r'^(\d{4}-\d{2}-\d{2})-')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def strip_date_prefix(stem: str) -> str:
    """Drop a leading 'YYYY-MM-DD-' from a file stem ('2020-01-01-hello' → 'hello')."""
    return DATE_PREFIX_RE.sub('', stem, count=1)


def unique_anchor(text: str, seen: dict[str, int]) -> str:
    """Slugify heading text, suffixing -1, -2, ... for repeats tracked in `seen`."""
    base = slugify(text) or "section"
    count = seen.get(base, 0)
    seen[base] = count + 1
    return base if count == 0 else f"{base}-{count}"
