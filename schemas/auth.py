from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from enums import Role
from schemas.common import CamelModel


class SessionUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(
        default=..., description="ID", validation_alias=AliasChoices("id", "_id")
    )
    name: str = Field(default="", description="Name")
    email: str | None = Field(default=None, description="Email")
    phone: str | None = Field(default=None, description="Phone")
    avatar: str | None = Field(default=None, description="Avatar URL")
    role: str = Field(default=..., description="Role")

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN


class SessionAuth(BaseModel):
    token: str = Field(default=..., description="Bearer token", min_length=1)
    user: SessionUser = Field(default=..., description="Signed-in user")

    @classmethod
    def from_login_data(cls, data: Any) -> "SessionAuth":
        """Build a session from the `data` of verify-otp or debug-auth."""
        payload = data if isinstance(data, dict) else {}
        return cls(token=payload.get("token", ""), user=payload.get("user") or {})


class SendOtpRequest(BaseModel):
    phone: str = Field(default=..., description="Full phone number", min_length=1)


class VerifyOtpRequest(BaseModel):
    phone: str = Field(default=..., description="Full phone number", min_length=1)
    otp: str = Field(default=..., description="One-time code", pattern=r"^\d+$")


class DebugAuthRequest(BaseModel):
    name: str = Field(default=..., description="Name")
    email: str = Field(default=..., description="Email")
    phone: str = Field(default=..., description="Phone")
    role: Role = Field(default=Role.SUPER_ADMIN, description="Role")


class ProfileUpdateRequest(CamelModel):
    name: str | None = Field(default=None, description="Name")
    email: str | None = Field(default=None, description="Email")
    phone: str | None = Field(default=None, description="Phone")
    avatar: str | None = Field(default=None, description="Avatar URL")


class NotificationSettingsRequest(CamelModel):
    new_requests: bool | None = Field(default=None, description="New requests")
    reminders: bool | None = Field(default=None, description="Reminders")
    policy_and_community: bool | None = Field(
        default=None, description="Policy and community updates"
    )
    account_support: bool | None = Field(default=None, description="Account support")


class GlobalPreferencesRequest(CamelModel):
    language: str | None = Field(default=None, description="Language")
    currency: str | None = Field(default=None, description="Currency")
    timezone: str | None = Field(default=None, description="Timezone")
    country: str | None = Field(default=None, description="Country")
