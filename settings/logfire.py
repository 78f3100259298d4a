from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class LogfireSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="logfire_")

    service_name: str = Field(default="super-admin-portal", title="Service name")
    environment: str = Field(default="local", title="Deployment environment")
    send_to_logfire: bool = Field(default=False, title="Export spans to Logfire")


logfire_settings = LogfireSettings()
