from enum import StrEnum, auto


class ErrorCategory(StrEnum):
    UNAUTHORIZED = auto()
    NOT_FOUND = auto()
    CLIENT = auto()
    SERVER = auto()
    NETWORK = auto()
