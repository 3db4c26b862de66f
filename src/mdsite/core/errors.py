"""Per-document pipeline errors"""

from pathlib import Path


class PipelineError(Exception):
    """A failure local to one source document. `kind` names the error in reports."""
    kind = "PipelineError"

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{self.path}: {msg}" if self.path else msg


class MalformedFrontMatter(PipelineError):
    """Opening '---' without a closing delimiter, or a block that is not a YAML mapping."""
    kind = "MalformedFrontMatter"


class UnknownLayout(PipelineError):
    """The named layout has no template in the layout directory."""
    kind = "UnknownLayout"


class UnreadableFile(PipelineError):
    """The source document could not be read or decoded."""
    kind = "UnreadableFile"


class LayoutError(PipelineError):
    """The layout template exists but failed to compile or render."""
    kind = "LayoutError"


class OutputError(PipelineError):
    """The rendered page could not be written to the output directory."""
    kind = "OutputError"
