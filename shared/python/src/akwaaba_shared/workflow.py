"""
workflow.py — allowed status transitions for profiles and listings.

Three independent flips are modelled:

    verification   pending -> verified | rejected
    property       pending -> active | archived, active -> archived | sold
    approval       pending -> approved | rejected

Callers read the current row, check the transition here, then write. There
is no compare-and-swap on the write, so two concurrent moderators acting on
the same row both pass the check and the last UPDATE wins.
"""

from __future__ import annotations

from typing import Final, Literal

from akwaaba_shared.constants import ApprovalStatus, PropertyStatus, VerificationStatus
from akwaaba_shared.errors import InvalidTransitionError

WorkflowKind = Literal["verification", "property", "approval"]

TRANSITIONS: Final[dict[str, dict[str, frozenset[str]]]] = {
    "verification": {
        VerificationStatus.PENDING.value: frozenset(
            {VerificationStatus.VERIFIED.value, VerificationStatus.REJECTED.value}
        ),
    },
    "property": {
        PropertyStatus.PENDING.value: frozenset(
            {PropertyStatus.ACTIVE.value, PropertyStatus.ARCHIVED.value}
        ),
        PropertyStatus.ACTIVE.value: frozenset(
            {PropertyStatus.ARCHIVED.value, PropertyStatus.SOLD.value}
        ),
    },
    "approval": {
        ApprovalStatus.PENDING.value: frozenset(
            {ApprovalStatus.APPROVED.value, ApprovalStatus.REJECTED.value}
        ),
    },
}


def _value(status: object) -> str | None:
    if status is None:
        return None
    return getattr(status, "value", status)  # type: ignore[return-value]


def can_transition(kind: WorkflowKind, current: object, target: object) -> bool:
    """Return True if `current -> target` is an allowed move for `kind`."""
    allowed = TRANSITIONS[kind].get(_value(current) or "", frozenset())
    return _value(target) in allowed


def ensure_transition(kind: WorkflowKind, current: object, target: object) -> None:
    """Raise InvalidTransitionError unless `current -> target` is allowed."""
    if not can_transition(kind, current, target):
        raise InvalidTransitionError(
            f"Cannot change {kind} status from '{_value(current)}' to '{_value(target)}'",
            details={"kind": kind, "current": _value(current), "target": _value(target)},
        )
