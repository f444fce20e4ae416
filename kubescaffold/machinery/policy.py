"""Existence policies for template builders.

A template declares what should happen when its target file already exists.
:func:`decide` turns that declaration (plus the optional force override) into
the concrete action the orchestrator takes.
"""

from __future__ import annotations

from enum import Enum


class IfExistsAction(str, Enum):
    """Declared behaviour for a target file that already exists."""

    SKIP = "skip"
    OVERWRITE = "overwrite"
    ERROR = "error"


class Decision(str, Enum):
    """Concrete outcome for a single template builder."""

    WRITE = "write"
    SKIP = "skip"
    OVERWRITE = "overwrite"
    ABORT = "abort"


def effective_action(action: IfExistsAction, force: bool = False) -> IfExistsAction:
    """Apply the force override: ``SKIP`` and ``ERROR`` become ``OVERWRITE``."""
    if force:
        return IfExistsAction.OVERWRITE
    return action


def decide(exists: bool, action: IfExistsAction, force: bool = False) -> Decision:
    """Return what to do with a rendered file.

    ======  =========  ==========
    exists  policy     decision
    ======  =========  ==========
    no      any        WRITE
    yes     SKIP       SKIP
    yes     OVERWRITE  OVERWRITE
    yes     ERROR      ABORT
    ======  =========  ==========

    ``force`` is applied before the table is consulted.
    """
    if not exists:
        return Decision.WRITE
    action = effective_action(action, force)
    if action is IfExistsAction.SKIP:
        return Decision.SKIP
    if action is IfExistsAction.OVERWRITE:
        return Decision.OVERWRITE
    return Decision.ABORT
