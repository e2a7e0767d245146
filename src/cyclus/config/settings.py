import logging
from logging import Logger

import pydantic
import pydantic_settings as settings

from .setup import setup_logging


class SystemSettings(settings.BaseSettings):
    """
    Settings of a system, read from the environment (``CYCLUS_*``) and ``.env``.

    Attributes:
        name: Label of the system in log records.
        log_level: Level used by ``configure``.
        emit_events: Whether lifecycle events reach the system's event sink.
    """
    model_config = settings.SettingsConfigDict(
        env_prefix="CYCLUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True
    )

    name: str = pydantic.Field(
        default="system",
        min_length=1,
        description="Label of the system in log records"
    )

    log_level: str = pydantic.Field(
        default="WARNING",
        description="Logging level name used when configuring logging"
    )

    emit_events: bool = pydantic.Field(
        default=True,
        description="Notify the event sink of lifecycle transitions"
    )

    @pydantic.field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, int):
            v = logging.getLevelName(v)
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown logging level: {v}")
        return level

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    def configure(self) -> Logger:
        """Attach a stream handler to the ``cyclus`` logger at ``log_level``."""
        return setup_logging("cyclus", self.level)
