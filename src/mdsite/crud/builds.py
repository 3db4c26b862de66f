"""Build history persistence: record runs and query recent outcomes"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Session, col, select

from mdsite.core.models import BuildResult, BuildStatus
from mdsite.crud.models import BuildRecord, BuildRun


def record_run(
    session: Session,
    source: str,
    output_dir: str,
    results: list[BuildResult],
    started_at: datetime | None = None,
    ) -> BuildRun:
    """Insert a BuildRun with one BuildRecord per result.

    Flushes but does not commit; caller controls the transaction.
    """
    run = BuildRun(
        source=source,
        output_dir=output_dir,
        started_at=started_at or datetime.now(),
        finished_at=datetime.now(),
        rendered=sum(1 for r in results if r.status == BuildStatus.rendered),
        failed=sum(1 for r in results if r.status == BuildStatus.failed),
    )
    session.add(run)
    session.flush()

    for r in results:
        session.add(BuildRecord(
            run_id=run.id,
            source_path=str(r.source),
            hash=r.hash,
            output_path=str(r.output_path) if r.output_path else None,
            status=r.status.value,
            error_kind=r.error_kind,
            error=r.error,
        ))
    session.flush()
    return run


def list_runs(session: Session, limit: int = 10) -> list[BuildRun]:
    """Return the most recent runs, newest first."""
    stmt = select(BuildRun).order_by(col(BuildRun.started_at).desc()).limit(limit)
    return list(session.exec(stmt).all())


def get_last_run(session: Session) -> BuildRun | None:
    runs = list_runs(session, limit=1)
    return runs[0] if runs else None


def get_records(session: Session, run_id: UUID, status: BuildStatus | None = None) -> list[BuildRecord]:
    """Return a run's records ordered by source path, optionally filtered by status."""
    stmt = select(BuildRecord).where(BuildRecord.run_id == run_id)
    if status is not None:
        stmt = stmt.where(BuildRecord.status == status.value)
    return list(session.exec(stmt.order_by(col(BuildRecord.source_path))).all())
