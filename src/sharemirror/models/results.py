"""Result models for applying a MirrorPlan."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional


OperationStatus = Literal["success", "failed", "skipped"]
ApplyStatus = Literal["success", "failed"]


@dataclass(slots=True)
class OperationResult:
    """Result for a single Operation."""

    op_id: str
    seq: int
    action: str
    path: str
    status: OperationStatus

    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None

    handle: Optional[str] = None


@dataclass(slots=True)
class ApplyResult:
    """Aggregate result for apply_plan."""

    plan_id: str
    status: ApplyStatus
    stopped_op_id: Optional[str]
    results: list[OperationResult]

    handles: dict[str, str] = field(default_factory=dict)
    summary: dict[str, int] = field(default_factory=dict)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
