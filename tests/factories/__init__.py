from tests.factories.base import envelope, fake, page_envelope
from tests.factories.records import (
    BankFactory,
    CarTypeFactory,
    DealerFactory,
    LoanFactory,
    SessionUserFactory,
    UserFactory,
)

__all__ = [
    "BankFactory",
    "CarTypeFactory",
    "DealerFactory",
    "LoanFactory",
    "SessionUserFactory",
    "UserFactory",
    "envelope",
    "fake",
    "page_envelope",
]
