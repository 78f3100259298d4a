from enums.action import FollowUp, LifecycleAction
from enums.entity import EntityKind
from enums.error import ErrorCategory
from enums.role import Role
from enums.status import (
    AccountStatus,
    DealerStatus,
    ListStatus,
    LoanStatus,
    PhaseStatus,
    PhaseType,
)

__all__ = [
    "AccountStatus",
    "DealerStatus",
    "EntityKind",
    "ErrorCategory",
    "FollowUp",
    "LifecycleAction",
    "ListStatus",
    "LoanStatus",
    "PhaseStatus",
    "PhaseType",
    "Role",
]
