"""Site assembly: wrap rendered Markdown in a named Jinja2 layout"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound, select_autoescape
from markupsafe import Markup

from mdsite.core.errors import LayoutError, UnknownLayout
from mdsite.core.models import Document, RenderedBody, RenderedPage


logger = logging.getLogger(__name__)

LAYOUT_SUFFIX = ".html"


class SiteAssembler:
    """Loads `<name>.html` layouts from a directory and fills them with page data.

    Layouts see `title`, `date`, `content` (body HTML, not escaped), `page`
    (the full front-matter mapping), `headings`, `excerpt` and `site`.
    """

    def __init__(self, layout_dir: Path, default_layout: str = "default", site: dict[str, Any] = None):
        self.layout_dir = Path(layout_dir)
        self.default_layout = default_layout
        self.site = dict(site or {})
        self.env = Environment(
            loader=FileSystemLoader(str(self.layout_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
        )

    def available_layouts(self) -> list[str]:
        """Return sorted layout names found in the layout directory."""
        if not self.layout_dir.is_dir():
            return []
        return sorted(p.stem for p in self.layout_dir.glob(f"*{LAYOUT_SUFFIX}") if p.is_file())

    def layout_for(self, doc: Document) -> str:
        return doc.layout or self.default_layout

    def check_layout(self, name: str, path: Path | None = None) -> None:
        """Raise UnknownLayout unless `name` resolves to a template that compiles."""
        self._template(name, path)

    def _template(self, name: str, path: Path | None):
        # Reject names that would escape the layout directory
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise UnknownLayout(f"invalid layout name {name!r}", path)
        try:
            return self.env.get_template(f"{name}{LAYOUT_SUFFIX}")
        except TemplateNotFound as e:
            raise UnknownLayout(f"layout {name!r} not found in {self.layout_dir}", path) from e
        except TemplateError as e:
            raise LayoutError(f"layout {name!r} failed to compile: {e}", path) from e

    def assemble(self, doc: Document, body: RenderedBody, output_path: Path) -> RenderedPage:
        """Substitute metadata and body HTML into the document's layout."""
        name = self.layout_for(doc)
        template = self._template(name, doc.path)
        try:
            html = template.render(
                title=doc.title,
                date=doc.date,
                content=Markup(body.html),
                page=doc.metadata,
                headings=body.headings,
                excerpt=body.excerpt,
                site=self.site,
            )
        except (TemplateError, TypeError, ValueError, AttributeError, ArithmeticError) as e:
            # Layout code applied to one page's metadata (e.g. iterating `tags: 3`)
            raise LayoutError(f"layout {name!r} failed to render: {e}", doc.path) from e
        logger.debug("assembled %s with layout %s", doc.path, name)
        return RenderedPage(
            source=doc.path,
            layout=name,
            html=html,
            content=body.html,
            metadata=doc.metadata,
            output_path=output_path,
        )
