from enum import StrEnum, auto


class LifecycleAction(StrEnum):
    APPROVE = auto()
    BLOCK = auto()
    UNBLOCK = auto()
    DELETE = auto()
    RESTORE = auto()

    @classmethod
    def get_destructive(cls) -> set["LifecycleAction"]:
        return {cls.BLOCK, cls.DELETE}

    @property
    def label(self) -> str:
        return self.value.capitalize()


class FollowUp(StrEnum):
    REDIRECT = auto()
    PATCH = auto()
