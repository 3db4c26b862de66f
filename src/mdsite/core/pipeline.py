"""Pipeline step functions: read, render, assemble, write, and record orchestration"""

import logging
from datetime import datetime
from pathlib import Path

from sqlmodel import Session

from mdsite.core.assemble import SiteAssembler
from mdsite.core.errors import OutputError, PipelineError
from mdsite.core.export import output_path_for, write_page
from mdsite.core.models import BuildResult, BuildStatus, RenderedPage
from mdsite.core.parse import discover_files, parse_document, read_text
from mdsite.core.render import render_markdown
from mdsite.core.utils.hashing import sha256
from mdsite.crud.builds import record_run


logger = logging.getLogger(__name__)


def _content_root(source: Path) -> Path:
    return source if source.is_dir() else source.parent


def build_page(
    text: str,
    path: Path,
    root: Path,
    assembler: SiteAssembler,
    parser_config: str = 'gfm-like',
    anchors: bool = False,
    ) -> RenderedPage:
    """Run one document's text through parse -> render -> assemble."""
    doc = parse_document(text, path)
    # Fail on a missing layout before paying for the Markdown render
    assembler.check_layout(assembler.layout_for(doc), path)
    body = render_markdown(doc.body, parser_config, anchors=anchors)
    return assembler.assemble(doc, body, output_path_for(doc, root))


def run_build(
    source: Path,
    output_dir: Path,
    assembler: SiteAssembler,
    parser_config: str = 'gfm-like',
    anchors: bool = False,
    write: bool = True,
    ) -> list[BuildResult]:
    """Render every document under source. Returns one BuildResult per document.

    A PipelineError fails only its own document: it is logged with the path and
    error kind, recorded in the results, and processing continues. A document
    whose output path was already claimed by an earlier one fails with
    OutputError instead of overwriting it. With write=False pages are rendered
    but nothing is written (validation only).
    """
    source = Path(source)
    root = _content_root(source)
    results = []
    claimed: dict[Path, Path] = {}   # output path -> source that produced it
    for path in discover_files(source):
        digest = None
        try:
            text = read_text(path)
            digest = sha256(text)
            page = build_page(text, path, root, assembler, parser_config, anchors)
            if page.output_path in claimed:
                raise OutputError(
                    f"output path {page.output_path} collides with {claimed[page.output_path]}", path
                )
            claimed[page.output_path] = path
            if write:
                try:
                    dest = write_page(page, output_dir)
                except OSError as e:
                    raise OutputError(f"cannot write {output_dir / page.output_path}: {e}", path) from e
                logger.info("%s -> %s", path, dest)
            results.append(BuildResult(
                source=path, status=BuildStatus.rendered, hash=digest, output_path=page.output_path,
            ))
        except PipelineError as e:
            logger.error("%s: %s: %s", path, e.kind, e.args[0])
            results.append(BuildResult(
                source=path, status=BuildStatus.failed, hash=digest, error_kind=e.kind, error=e.args[0],
            ))
    return results


def run_and_record(
    engine,
    source: Path,
    output_dir: Path,
    assembler: SiteAssembler,
    parser_config: str = 'gfm-like',
    anchors: bool = False,
    ) -> list[BuildResult]:
    """Run a full build and store its outcome in the build history."""
    started_at = datetime.now()
    results = run_build(source, output_dir, assembler, parser_config, anchors)
    with Session(engine) as session:
        run = record_run(session, str(source), str(output_dir), results, started_at)
        session.commit()
        logger.debug("recorded build run %s (%d documents)", run.id, len(results))
    return results
