from pathlib import Path

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class CoreSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="core_")

    page_size: int = Field(default=10, title="Rows per list page", gt=0)
    otp_length: int = Field(default=4, title="OTP digit count", gt=0)
    otp_resend_seconds: int = Field(default=58, title="OTP resend countdown", ge=0)
    countdown_refresh_seconds: float = Field(
        default=1.0, title="Phase deadline countdown refresh cadence", gt=0
    )
    activity_limit: int = Field(default=5, title="Dashboard activity rows", gt=0)
    session_file: Path = Field(
        default=Path.home() / ".super_admin_portal" / "session.json",
        title="Persisted session file",
    )


core_settings = CoreSettings()
