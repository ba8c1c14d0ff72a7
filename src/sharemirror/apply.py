"""Apply a MirrorPlan through a provisioning engine (fail-fast)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sharemirror.engine import ProvisioningEngine
from sharemirror.errors import (
    AuthError,
    InvalidPlanError,
    PermissionError,
    ProviderError,
)
from sharemirror.models import ApplyResult, MirrorPlan, OperationResult
from sharemirror.plan import Action, Operation, build_apply_order
from sharemirror.util.time import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ApplyContext:
    handles: dict[str, str]
    directory_handles: dict[str, str]


def apply_plan(plan: MirrorPlan, engine: ProvisioningEngine) -> ApplyResult:
    """
    Execute every creation in plan against engine.

    Policy:
        - The plan is validated first; an invalid plan raises InvalidPlanError
          before any remote call.
        - Fail-fast: the first ProviderError stops the run and is reported in
          the result (status "failed", stopped_op_id set).
        - AuthError and PermissionError are fatal and re-raised.
        - No retries here; retrying is the engine's concern.
    """
    plan.validate()
    operations = build_apply_order(plan)
    for op in operations:
        try:
            op.validate_required_fields()
        except ValueError as exc:
            raise InvalidPlanError(
                "Invalid operation: missing required fields",
                details={"op_id": op.op_id, "action": op.action.value},
                cause=exc,
            ) from exc

    ctx = _ApplyContext(handles={}, directory_handles={})
    results: list[OperationResult] = []
    stopped_op_id: Optional[str] = None
    started_at = now_utc()

    for op in operations:
        try:
            _apply_one(engine, op, ctx)
            results.append(_success_result(op, ctx))
        except ProviderError as exc:
            if _is_fatal(exc):
                raise
            logger.warning("Operation %s on %s failed: %s", op.action.value, op.path, exc)
            results.append(_failed_result(op, exc))
            stopped_op_id = op.op_id
            break

    status = "failed" if stopped_op_id is not None else "success"
    summary = _summarize_results(results, total=len(operations))
    logger.info(
        "Applied plan %s: %s (%d succeeded, %d skipped)",
        plan.plan_id,
        status,
        summary["success"],
        summary["skipped"],
    )

    return ApplyResult(
        plan_id=plan.plan_id,
        status=status,  # type: ignore[arg-type]
        stopped_op_id=stopped_op_id,
        results=results,
        handles=dict(ctx.handles),
        summary=summary,
        started_at=started_at,
        finished_at=now_utc(),
    )


def _apply_one(engine: ProvisioningEngine, op: Operation, ctx: _ApplyContext) -> None:
    if op.action is Action.CREATE_DIRECTORY:
        handle = engine.create_directory(op.path)
        ctx.handles[op.op_id] = handle
        ctx.directory_handles[op.path] = handle
        return

    if op.action is Action.CREATE_FILE:
        parent_handle = None
        if op.parent is not None:
            # Directory ops run first, so a missing parent means a broken plan.
            if op.parent not in ctx.directory_handles:
                raise InvalidPlanError(
                    "Parent directory was not created",
                    details={"path": op.parent},
                )
            parent_handle = ctx.directory_handles[op.parent]
        depends_on = frozenset(ctx.handles[dep] for dep in op.depends_on)
        ctx.handles[op.op_id] = engine.create_file(
            op.name,  # type: ignore[arg-type]
            parent_handle,
            op.source_path,  # type: ignore[arg-type]
            depends_on,
        )
        return

    raise InvalidPlanError("Unsupported action", details={"action": op.action})


def _is_fatal(exc: ProviderError) -> bool:
    return isinstance(exc, (AuthError, PermissionError))


def _success_result(op: Operation, ctx: _ApplyContext) -> OperationResult:
    return OperationResult(
        op_id=op.op_id,
        seq=op.seq,
        action=op.action.value,
        path=op.path,
        status="success",
        handle=ctx.handles.get(op.op_id),
    )


def _failed_result(op: Operation, exc: ProviderError) -> OperationResult:
    return OperationResult(
        op_id=op.op_id,
        seq=op.seq,
        action=op.action.value,
        path=op.path,
        status="failed",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details=exc.details,
    )


def _summarize_results(results: list[OperationResult], *, total: int) -> dict[str, int]:
    summary: dict[str, int] = {"success": 0, "failed": 0, "skipped": 0}
    for r in results:
        summary[r.status] = summary.get(r.status, 0) + 1
    summary["skipped"] = total - len(results)
    return summary
