"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from mdsite.config import Settings, load_config
from mdsite.core.assemble import SiteAssembler
from mdsite.core.models import BuildResult, BuildStatus
from mdsite.core.pipeline import run_and_record, run_build
from mdsite.crud.builds import get_last_run, get_records, list_runs
from mdsite.crud.database import init_db, make_engine, reset_db


LOG_FORMAT = "%(levelname)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _assembler(settings: Settings) -> SiteAssembler:
    return SiteAssembler(
        Path(settings.layout_dir),
        default_layout=settings.default_layout,
        site={"title": settings.site_title},
    )


def _echo_results(results: list[BuildResult], verb: str) -> int:
    """Print per-doc failures and a summary line. Returns the failure count."""
    failed = [r for r in results if r.status == BuildStatus.failed]
    for r in failed:
        typer.echo(f"  FAILED {r.source}: {r.error_kind}: {r.error}", err=True)
    typer.echo(f"{verb} {len(results) - len(failed)} document(s), {len(failed)} failed")
    return len(failed)


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Static Markdown site renderer."""
    level = "DEBUG" if verbose else _settings().log_level
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content file or directory (default: content_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    layouts: Annotated[Optional[str], typer.Option("--layout-dir", help="Layout template directory")] = None,
    layout: Annotated[Optional[str], typer.Option("--default-layout", help="Layout for documents that name none")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    anchors: Annotated[Optional[bool], typer.Option("--anchors/--no-anchors", help="Add id attributes to headings")] = None,
    ):
    """Render every document to HTML and record the run in the build history."""
    settings = _settings(overrides={
        "content_dir": path, "output_dir": out, "layout_dir": layouts,
        "default_layout": layout, "parser_config": parser, "heading_anchors": anchors,
    })
    source = Path(settings.content_dir)
    if not source.exists():
        _fail(f"Content path not found: {source}")
    engine = make_engine(settings.db_url)
    init_db(engine)

    output_dir = Path(settings.output_dir)
    try:
        results = run_and_record(
            engine, source, output_dir, _assembler(settings),
            settings.parser_config, settings.heading_anchors,
        )
    except Exception as e:
        _fail("Build failed", e)
    if not results:
        typer.echo(f"No Markdown documents found under {source}.")
        raise typer.Exit(1)
    if _echo_results(results, f"Rendered to {output_dir}/:"):
        raise typer.Exit(1)


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content file or directory (default: content_dir)")] = None,
    layouts: Annotated[Optional[str], typer.Option("--layout-dir", help="Layout template directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Validate front matter and layouts without writing any output."""
    settings = _settings(overrides={"content_dir": path, "layout_dir": layouts, "parser_config": parser})
    source = Path(settings.content_dir)
    if not source.exists():
        _fail(f"Content path not found: {source}")
    results = run_build(
        source, Path(settings.output_dir), _assembler(settings), settings.parser_config, write=False,
    )
    if _echo_results(results, "Checked"):
        raise typer.Exit(1)


def layouts_cmd(
    layouts: Annotated[Optional[str], typer.Option("--layout-dir", help="Layout template directory")] = None,
    ):
    """List layout names available in the layout directory."""
    settings = _settings(overrides={"layout_dir": layouts})
    names = _assembler(settings).available_layouts()
    if not names:
        typer.echo(f"No layouts found in {settings.layout_dir}/.")
        raise typer.Exit(1)
    for name in names:
        marker = " (default)" if name == settings.default_layout else ""
        typer.echo(f"{name}{marker}")


def history_cmd(
    limit: Annotated[int, typer.Option("--limit", help="Number of runs to show")] = 10,
    failures: Annotated[bool, typer.Option("--failures", help="Show failed documents of the last run")] = False,
    ):
    """Show recent build runs from the build history."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        if failures:
            run = get_last_run(session)
            if run is None:
                typer.echo("No builds recorded.")
                raise typer.Exit(1)
            records = get_records(session, run.id, BuildStatus.failed)
            if not records:
                typer.echo(f"Last run ({run.started_at:%Y-%m-%d %H:%M:%S}) had no failures.")
                return
            for rec in records:
                typer.echo(f"{rec.source_path}: {rec.error_kind}: {rec.error}")
            return

        runs = list_runs(session, limit=limit)
        if not runs:
            typer.echo("No builds recorded.")
            raise typer.Exit(1)
        for run in runs:
            typer.echo(
                f"{run.started_at:%Y-%m-%d %H:%M:%S}  {run.source} -> {run.output_dir}  "
                f"rendered={run.rendered} failed={run.failed}"
            )


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the build history database. Use --reset to clear existing history."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing history cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
