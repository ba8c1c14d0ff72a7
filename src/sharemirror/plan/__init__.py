"""Public plan exports for sharemirror."""

from __future__ import annotations

from .actions import Action
from .operation import Operation
from .ordering import build_apply_order
from .planner import plan

__all__ = [
    "Action",
    "Operation",
    "build_apply_order",
    "plan",
]
