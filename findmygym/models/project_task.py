from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from findmygym.models.base import Base


class ProjectTask(Base):
    """Flattened copy of a task-tracker subtask (see scripts/tasks)."""

    __tablename__ = "project_tasks"

    # Subtask id, e.g. "P1-T2-S3"
    id = Column(String, primary_key=True)
    phase_id = Column(String, nullable=False, index=True)
    task_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    status = Column(String(16), nullable=False, default="pending", server_default="pending")
    test_type = Column(String(32), nullable=False)
    test_spec: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
