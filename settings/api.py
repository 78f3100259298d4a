from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class ApiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="api_")

    base_url: str = Field(default="http://localhost:5000/api", title="API base URL")
    timeout: float = Field(default=30.0, title="Request timeout in seconds", gt=0)


api_settings = ApiSettings()
