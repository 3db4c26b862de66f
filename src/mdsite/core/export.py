"""Output naming and writing of rendered pages"""

from pathlib import Path

from mdsite.core.models import Document, RenderedPage
from mdsite.core.utils.slug import slugify, strip_date_prefix


def page_slug(doc: Document) -> str:
    """Front-matter slug, else slugified title, else slugified file stem without its date prefix."""
    for candidate in (doc.metadata.get('slug'), doc.title):
        if candidate:
            slug = slugify(str(candidate))
            if slug:
                return slug
    return slugify(strip_date_prefix(doc.path.stem)) or 'index'


def output_path_for(doc: Document, root: Path) -> Path:
    """Relative output path for a document found under root.

    Mirrors the source directory structure:
      Path(doc.path).relative_to(root).parent / '<date>-<slug>.html'
    The date prefix is omitted for undated documents.
    """
    try:
        parent = doc.path.relative_to(root).parent
    except ValueError:
        parent = Path()
    slug = page_slug(doc)
    name = f"{doc.date.isoformat()}-{slug}" if doc.date else slug
    return parent / f"{name}.html"


def write_page(page: RenderedPage, output_dir: Path) -> Path:
    """Write the assembled HTML under output_dir and return the destination path."""
    dest = output_dir / page.output_path
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(page.html, encoding='utf-8')
    return dest
