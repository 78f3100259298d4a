from enum import StrEnum


class EntityKind(StrEnum):
    DEALERS = "dealers"
    USERS = "users"
    BANKS = "banks"
    BANK_LOANS = "bank-loans"
    CAR_TYPES = "car-types"
    FAQS = "faqs"

    @property
    def path(self) -> str:
        return f"/super-admin/{self.value}"

    @property
    def items_key(self) -> str:
        """Key the list endpoint nests its records under."""
        return {
            EntityKind.DEALERS: "dealers",
            EntityKind.USERS: "users",
            EntityKind.BANKS: "banks",
            EntityKind.BANK_LOANS: "loans",
            EntityKind.CAR_TYPES: "carTypes",
            EntityKind.FAQS: "faqs",
        }[self]

    @property
    def detail_key(self) -> str | None:
        """Key the detail endpoint nests its record under, if any."""
        if self is EntityKind.DEALERS:
            return "dealer"
        return None

    @property
    def label(self) -> str:
        return {
            EntityKind.DEALERS: "Dealers",
            EntityKind.USERS: "Users",
            EntityKind.BANKS: "Banks",
            EntityKind.BANK_LOANS: "Bank Loans",
            EntityKind.CAR_TYPES: "Car Types",
            EntityKind.FAQS: "FAQs",
        }[self]

    @classmethod
    def get_paginated(cls) -> set["EntityKind"]:
        return {cls.DEALERS, cls.USERS, cls.BANKS, cls.BANK_LOANS}

    @classmethod
    def get_read_only(cls) -> set["EntityKind"]:
        return {cls.BANK_LOANS}

    @classmethod
    def get_detailed(cls) -> set["EntityKind"]:
        return {cls.DEALERS, cls.USERS, cls.BANKS, cls.BANK_LOANS}
