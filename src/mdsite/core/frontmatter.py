"""Front-matter extraction and re-serialization"""

from typing import Any

import yaml

from mdsite.core.errors import MalformedFrontMatter


DELIMITER = "---"


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def parse_frontmatter(text: str, path=None) -> tuple[dict[str, Any], str]:
    """Return (metadata, body) for raw file text.

    Text that does not open with a '---' line is returned whole as the body.
    The body after a closing delimiter is returned verbatim.
    """
    lines = text.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return {}, text

    end = next((i for i in range(1, len(lines)) if _is_delimiter(lines[i])), None)
    if end is None:
        raise MalformedFrontMatter("front matter opened with '---' but never closed", path)

    block = "".join(lines[1:end])
    try:
        data = yaml.safe_load(block) if block.strip() else {}
    except (yaml.YAMLError, ValueError) as e:
        # ValueError: well-formed YAML timestamps naming impossible dates (2020-02-30)
        raise MalformedFrontMatter(f"invalid YAML front matter: {e}", path) from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontMatter(
            f"front matter must be a mapping, got {type(data).__name__}", path
        )
    return {str(k): v for k, v in data.items()}, "".join(lines[end + 1:])


def dump_frontmatter(metadata: dict[str, Any]) -> str:
    """Serialize metadata as a '---'-delimited YAML block, keeping key order."""
    if not metadata:
        return f"{DELIMITER}\n{DELIMITER}\n"
    header = yaml.safe_dump(metadata, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"{DELIMITER}\n{header}{DELIMITER}\n"
