"""Database table definitions for build runs and per-document build records"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, Relationship, SQLModel


class BuildRun(SQLModel, table=True):
    """One invocation of the build pipeline over a content source"""
    __tablename__ = "build_runs"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    source: str = Field(..., sa_column=Column(Text, nullable=False))
    output_dir: str = Field(..., sa_column=Column(Text, nullable=False))
    started_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False, index=True))
    finished_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
    rendered: int = Field(default=0, nullable=False)
    failed: int = Field(default=0, nullable=False)
    records: List["BuildRecord"] = Relationship(back_populates="run")


class BuildRecord(SQLModel, table=True):
    """Outcome of rendering a single source document within a run"""
    __tablename__ = "build_records"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    run_id: UUID = Field(..., foreign_key="build_runs.id", index=True, nullable=False)
    source_path: str = Field(..., sa_column=Column(Text, nullable=False))
    hash: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True))
    output_path: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    status: str = Field(..., sa_column=Column(String(16), nullable=False))
    error_kind: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True))
    error: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    run: Optional[BuildRun] = Relationship(back_populates="records")
