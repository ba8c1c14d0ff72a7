"""Plan and apply several mirrored shares independently."""

from __future__ import annotations

import logging
import os
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from sharemirror.apply import apply_plan
from sharemirror.engine import ProvisioningEngine
from sharemirror.errors import (
    AuthError,
    ConfigError,
    LocalReadError,
    MirrorError,
    PermissionError,
    QuotaExceededError,
)
from sharemirror.models import ApplyResult, MirrorPlan
from sharemirror.plan import plan

logger = logging.getLogger(__name__)

DEFAULT_QUOTA_GB = 50
_GIB = 1024 ** 3


@dataclass(slots=True, frozen=True)
class ShareSpec:
    """One local directory mirrored into one remote destination."""

    name: str
    local_dir: str
    destination: str
    quota_gb: int = DEFAULT_QUOTA_GB

    def __post_init__(self) -> None:
        for field_name in ("name", "local_dir", "destination"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"share.{field_name} must be a non-empty string")
        if not isinstance(self.quota_gb, int) or isinstance(self.quota_gb, bool) or self.quota_gb <= 0:
            raise ConfigError(
                "share.quota_gb must be a positive integer",
                details={"share": self.name, "quota_gb": self.quota_gb},
            )


@dataclass(slots=True)
class ShareOutcome:
    share: ShareSpec
    plan: Optional[MirrorPlan] = None
    result: Optional[ApplyResult] = None
    error: Optional[MirrorError] = None

    @property
    def ok(self) -> bool:
        if self.error is not None:
            return False
        return self.result is None or self.result.status == "success"


def plan_size_bytes(mirror_plan: MirrorPlan) -> int:
    """
    Total size of the source files in mirror_plan.

    Raises:
        LocalReadError: if a source file vanished or cannot be stat'ed.
    """
    total = 0
    for f in mirror_plan.files:
        try:
            total += os.path.getsize(f.source_path)
        except OSError as exc:
            raise LocalReadError(
                f"Cannot read source file: {f.source_path}",
                details={"path": f.source_path},
                cause=exc,
            ) from exc
    return total


def check_quota(mirror_plan: MirrorPlan, quota_gb: int) -> None:
    """
    Raises:
        QuotaExceededError: if the plan's files do not fit in quota_gb.
    """
    size = plan_size_bytes(mirror_plan)
    if size > quota_gb * _GIB:
        raise QuotaExceededError(
            "Mirrored files exceed share quota",
            details={"size_bytes": size, "quota_gb": quota_gb},
        )


class MirrorSet:
    """
    A group of shares, each planned and applied on its own.

    A failure while planning or applying one share is recorded on that
    share's outcome and never stops or alters the others. AuthError and
    PermissionError are re-raised since they affect every share.
    """

    def __init__(self, shares: Sequence[ShareSpec]) -> None:
        shares = tuple(shares)
        counts = Counter(s.name for s in shares)
        duplicates = sorted(n for n, c in counts.items() if c > 1)
        if duplicates:
            raise ConfigError("Duplicate share names", details={"names": duplicates})
        self.shares = shares

    def plan_all(self) -> list[ShareOutcome]:
        outcomes: list[ShareOutcome] = []
        for share in self.shares:
            try:
                outcomes.append(ShareOutcome(share=share, plan=plan(share.local_dir, share.destination)))
            except MirrorError as exc:
                logger.error("Planning share %s failed: %s", share.name, exc)
                outcomes.append(ShareOutcome(share=share, error=exc))
        return outcomes

    def apply_all(
        self,
        engine_factory: Callable[[ShareSpec], ProvisioningEngine],
    ) -> list[ShareOutcome]:
        outcomes = self.plan_all()
        for outcome in outcomes:
            if outcome.plan is None:
                continue
            try:
                check_quota(outcome.plan, outcome.share.quota_gb)
                engine = engine_factory(outcome.share)
                outcome.result = apply_plan(outcome.plan, engine)
            except (AuthError, PermissionError):
                raise
            except MirrorError as exc:
                logger.error("Applying share %s failed: %s", outcome.share.name, exc)
                outcome.error = exc
        return outcomes
