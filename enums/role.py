from enum import StrEnum


class Role(StrEnum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MANAGER = "manager"
    SALES = "sales"
    STAFF = "staff"
    FINANCIAL_APPROVAL = "financial-approval"
    CLIENT = "client"
