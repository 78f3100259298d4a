from enum import StrEnum, auto


class DealerStatus(StrEnum):
    PENDING = auto()
    ACTIVE = auto()
    BLOCKED = auto()
    DELETED = auto()


class AccountStatus(StrEnum):
    """Tab status for kinds that only carry an `isActive` flag."""

    ACTIVE = auto()
    BLOCKED = auto()
    DELETED = auto()


class LoanStatus(StrEnum):
    PENDING = auto()
    APPROVED = auto()
    REJECTED = auto()
    CLOSED = auto()
    CANCELLED = auto()


class PhaseStatus(StrEnum):
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    EDITS_REQUIRED = auto()
    COMPLETED = auto()
    APPROVED = auto()
    REJECTED = auto()

    @classmethod
    def get_done(cls) -> set["PhaseStatus"]:
        return {cls.COMPLETED, cls.APPROVED}

    @classmethod
    def get_failed(cls) -> set["PhaseStatus"]:
        return {cls.REJECTED, cls.EDITS_REQUIRED}


class PhaseType(StrEnum):
    CLIENT_PERSONAL_INFO = auto()
    DEALERSHIP_SELECTION = auto()
    DEALERSHIP_PRICING = auto()
    BANK_OFFERS = auto()


class ListStatus(StrEnum):
    IDLE = auto()
    LOADING = auto()
    READY = auto()
    ERROR = auto()
