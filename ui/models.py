from dataclasses import dataclass, field
from typing import Any

from enums import EntityKind, FollowUp, LifecycleAction, ListStatus
from schemas import ListQuery, PageResult


@dataclass
class ListSnapshot:
    """Visible state of one list view."""

    status: ListStatus = ListStatus.IDLE
    query: ListQuery | None = None
    result: PageResult | None = None
    error: str | None = None

    @property
    def items(self) -> list[dict[str, Any]]:
        return self.result.items if self.result else []

    @property
    def is_loading(self) -> bool:
        return self.status is ListStatus.LOADING


@dataclass(frozen=True)
class PendingAction:
    """A lifecycle action the admin asked for but has not confirmed yet."""

    action: LifecycleAction
    kind: EntityKind
    record_id: str
    confirmed: bool = False


@dataclass
class ActionOutcome:
    action: LifecycleAction
    kind: EntityKind
    record_id: str
    follow_up: FollowUp
    record: dict[str, Any] = field(default_factory=dict)
