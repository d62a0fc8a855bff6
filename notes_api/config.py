import logging
import sys
from functools import lru_cache
from typing import Literal, TextIO

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_stream: Literal["stdout", "stderr"] = Field(default="stdout", alias="LOG_STREAM")
    collect_default_metrics: bool = Field(default=True, alias="COLLECT_DEFAULT_METRICS")

    @property
    def log_level_value(self) -> int:
        value = logging.getLevelName(self.log_level.upper())
        return value if isinstance(value, int) else logging.INFO

    @property
    def log_output(self) -> TextIO:
        return sys.stderr if self.log_stream == "stderr" else sys.stdout


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
