from dataclasses import replace
from typing import Any

import logfire

from enums import AccountStatus, DealerStatus, EntityKind, FollowUp, LifecycleAction
from exceptions import (
    ConfirmationRequiredError,
    ReasonRequiredError,
    TransitionNotAllowedError,
)
from ui.api import ApiClient
from ui.models import ActionOutcome, PendingAction

INACTIVE = "inactive"

# status -> action -> status after the action (None: record disappears)
TRANSITIONS: dict[EntityKind, dict[str, dict[LifecycleAction, str | None]]] = {
    EntityKind.DEALERS: {
        DealerStatus.PENDING: {
            LifecycleAction.APPROVE: DealerStatus.ACTIVE,
            LifecycleAction.DELETE: DealerStatus.DELETED,
        },
        DealerStatus.ACTIVE: {
            LifecycleAction.BLOCK: DealerStatus.BLOCKED,
            LifecycleAction.DELETE: DealerStatus.DELETED,
        },
        DealerStatus.BLOCKED: {
            LifecycleAction.UNBLOCK: DealerStatus.ACTIVE,
            LifecycleAction.DELETE: DealerStatus.DELETED,
        },
        DealerStatus.DELETED: {
            LifecycleAction.RESTORE: DealerStatus.ACTIVE,
        },
    },
    EntityKind.USERS: {
        AccountStatus.ACTIVE: {
            LifecycleAction.BLOCK: AccountStatus.BLOCKED,
            LifecycleAction.DELETE: AccountStatus.DELETED,
        },
    },
    EntityKind.BANKS: {
        AccountStatus.ACTIVE: {
            LifecycleAction.BLOCK: AccountStatus.BLOCKED,
            LifecycleAction.DELETE: AccountStatus.DELETED,
        },
    },
    EntityKind.CAR_TYPES: {
        AccountStatus.ACTIVE: {LifecycleAction.DELETE: None},
        INACTIVE: {LifecycleAction.DELETE: None},
    },
    EntityKind.FAQS: {
        AccountStatus.ACTIVE: {LifecycleAction.DELETE: None},
        INACTIVE: {LifecycleAction.DELETE: None},
    },
}


def record_key(record: dict[str, Any]) -> str:
    return str(record.get("_id") or record.get("id") or "")


def record_status(kind: EntityKind, record: dict[str, Any]) -> str:
    """Status that places a record in its tab.

    Dealers carry an explicit `status`; the other kinds only an `isActive`
    flag.
    """
    if kind is EntityKind.DEALERS:
        return str(record.get("status") or "")
    is_active = bool(record.get("isActive", True))
    if kind in (EntityKind.CAR_TYPES, EntityKind.FAQS):
        return AccountStatus.ACTIVE if is_active else INACTIVE
    return AccountStatus.ACTIVE if is_active else AccountStatus.BLOCKED


def available_actions(
    kind: EntityKind, record: dict[str, Any]
) -> list[LifecycleAction]:
    """Lifecycle actions the record's current status permits."""
    allowed = TRANSITIONS.get(kind, {}).get(record_status(kind, record), {})
    return list(allowed)


def requires_reason(kind: EntityKind, action: LifecycleAction) -> bool:
    return kind is EntityKind.DEALERS and action is LifecycleAction.BLOCK


def follow_up_for(kind: EntityKind, action: LifecycleAction) -> FollowUp:
    """Redirect when the action moves the record out of its tab."""
    if kind in (EntityKind.CAR_TYPES, EntityKind.FAQS):
        return FollowUp.PATCH
    return FollowUp.REDIRECT


def patch_record(
    records: list[dict[str, Any]], record_id: str, changes: dict[str, Any]
) -> list[dict[str, Any]]:
    return [
        {**record, **changes} if record_key(record) == record_id else record
        for record in records
    ]


def target_status(kind: EntityKind, action: LifecycleAction) -> str | None:
    for allowed in TRANSITIONS.get(kind, {}).values():
        if action in allowed:
            return allowed[action]
    return None


def apply_outcome(
    records: list[dict[str, Any]], outcome: ActionOutcome
) -> list[dict[str, Any]]:
    """Apply a finished action to an in-memory list without refetching.

    Args:
        records: Records currently displayed.
        outcome: Finished action.

    Returns:
        New list with the record removed (delete) or updated.

    """
    if outcome.action is LifecycleAction.DELETE:
        return [
            record for record in records if record_key(record) != outcome.record_id
        ]

    changes = dict(outcome.record)
    if outcome.kind is EntityKind.DEALERS:
        status = target_status(kind=outcome.kind, action=outcome.action)
        if status is not None:
            changes.setdefault("status", str(status))
    elif outcome.kind in (EntityKind.USERS, EntityKind.BANKS):
        changes.setdefault("isActive", outcome.action is LifecycleAction.UNBLOCK)
    return patch_record(records=records, record_id=outcome.record_id, changes=changes)


class LifecycleActionController:
    """Runs lifecycle actions with a request then confirm exchange.

    Block and delete are destructive: `execute` refuses them unless the same
    action on the same record was requested and confirmed first.
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self.pending: PendingAction | None = None

    def ensure_allowed(
        self, action: LifecycleAction, kind: EntityKind, record: dict[str, Any]
    ) -> None:
        if action not in available_actions(kind=kind, record=record):
            status = record_status(kind=kind, record=record) or "unknown"
            label = kind.label.lower()
            raise TransitionNotAllowedError(
                message=f"Cannot {action.value} {label} in status {status}"
            )

    def request(
        self, action: LifecycleAction, kind: EntityKind, record: dict[str, Any]
    ) -> PendingAction:
        """Record the intent to run `action`; it still needs `confirm`."""
        self.ensure_allowed(action=action, kind=kind, record=record)
        self.pending = PendingAction(
            action=action, kind=kind, record_id=record_key(record)
        )
        return self.pending

    def confirm(self, pending: PendingAction | None = None) -> PendingAction:
        pending = pending or self.pending
        if pending is None or pending != self.pending:
            raise ConfirmationRequiredError(message="Nothing to confirm")
        self.pending = replace(pending, confirmed=True)
        return self.pending

    def cancel(self) -> None:
        self.pending = None

    def is_confirmed(
        self, action: LifecycleAction, kind: EntityKind, record_id: str
    ) -> bool:
        pending = self.pending
        return (
            pending is not None
            and pending.confirmed
            and pending.action is action
            and pending.kind is kind
            and pending.record_id == record_id
        )

    async def execute(
        self,
        action: LifecycleAction,
        kind: EntityKind,
        record: dict[str, Any],
        reason: str | None = None,
    ) -> ActionOutcome:
        """Send the action to the backend.

        Args:
            action: Lifecycle action.
            kind: Entity kind of the record.
            record: Record the action targets.
            reason: Free-text reason; required to block a dealer.

        Returns:
            Outcome with the follow-up the caller should apply.

        Raises:
            TransitionNotAllowedError: Current status does not permit it.
            ConfirmationRequiredError: Destructive action not confirmed.
            ReasonRequiredError: Dealer block without a reason.

        """
        record_id = record_key(record)
        self.ensure_allowed(action=action, kind=kind, record=record)
        if action in LifecycleAction.get_destructive() and not self.is_confirmed(
            action=action, kind=kind, record_id=record_id
        ):
            raise ConfirmationRequiredError(
                message=f"{action.label} must be confirmed first"
            )
        reason = (reason or "").strip() or None
        if reason is None and requires_reason(kind=kind, action=action):
            raise ReasonRequiredError(
                message=f"Please provide a reason to {action.value} this dealer"
            )

        data = await self.client.transition(
            kind=kind, record_id=record_id, action=action, reason=reason
        )
        self.pending = None
        logfire.info(
            "{action} {kind} {record_id}", action=action, kind=kind, record_id=record_id
        )
        if isinstance(data, dict) and kind.detail_key in data:
            data = data[kind.detail_key]
        return ActionOutcome(
            action=action,
            kind=kind,
            record_id=record_id,
            follow_up=follow_up_for(kind=kind, action=action),
            record=data if isinstance(data, dict) else {},
        )
