from constants.display import (
    CURRENCY,
    DASH,
    DEFAULT_ASSIGNEE,
    DEFAULT_COUNTRY,
    EMPTY,
    EXPIRED,
    NO_DEADLINE,
    NO_PHONE,
    NOT_AVAILABLE,
    REQUEST_FAILED,
    UNKNOWN,
    UNKNOWN_BANK,
)
from constants.encoding import UTF8
from constants.pagination import MAX_VISIBLE_PAGES
from constants.storage import PHONE_KEY, TOKEN_KEY, USER_KEY

__all__ = [
    "CURRENCY",
    "DASH",
    "DEFAULT_ASSIGNEE",
    "DEFAULT_COUNTRY",
    "EMPTY",
    "EXPIRED",
    "MAX_VISIBLE_PAGES",
    "NO_DEADLINE",
    "NO_PHONE",
    "NOT_AVAILABLE",
    "PHONE_KEY",
    "REQUEST_FAILED",
    "TOKEN_KEY",
    "UNKNOWN",
    "UNKNOWN_BANK",
    "USER_KEY",
    "UTF8",
]
