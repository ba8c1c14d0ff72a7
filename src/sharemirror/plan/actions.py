"""Plan actions for sharemirror."""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """Remote creation actions emitted from a MirrorPlan."""

    CREATE_DIRECTORY = "CREATE_DIRECTORY"
    CREATE_FILE = "CREATE_FILE"
