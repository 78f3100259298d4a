from schemas.auth import (
    DebugAuthRequest,
    GlobalPreferencesRequest,
    NotificationSettingsRequest,
    ProfileUpdateRequest,
    SendOtpRequest,
    SessionAuth,
    SessionUser,
    VerifyOtpRequest,
)
from schemas.common import ALL_FILTER, CamelModel, ListQuery, PageResult
from schemas.entity import (
    AddressRequest,
    BankRequest,
    CarTypeRequest,
    ContactPersonRequest,
    DealerRequest,
    FaqRequest,
    UserRequest,
)

__all__ = [
    "ALL_FILTER",
    "AddressRequest",
    "BankRequest",
    "CamelModel",
    "CarTypeRequest",
    "ContactPersonRequest",
    "DealerRequest",
    "DebugAuthRequest",
    "FaqRequest",
    "GlobalPreferencesRequest",
    "ListQuery",
    "NotificationSettingsRequest",
    "PageResult",
    "ProfileUpdateRequest",
    "SendOtpRequest",
    "SessionAuth",
    "SessionUser",
    "UserRequest",
]
