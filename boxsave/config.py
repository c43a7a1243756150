# config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Box server
    box_server_url: Optional[str] = None

    # HTTP timeouts in seconds
    connect_timeout: float = 10.0
    send_timeout: float = 10.0
    receive_timeout: float = 10.0

    log_level: str = "INFO"

settings = Settings()
