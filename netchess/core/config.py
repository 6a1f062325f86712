"""Settings for a single peer. Defaults can be overridden through environment variables or the command line."""

import os
from typing import Optional, Self

from pydantic import BaseModel, field_validator

from netchess.core.exceptions import ConfigError

ENV_PREFIX = "NETCHESS_"
DEFAULT_PORT = 3000
DEFAULT_TURN_SECONDS = 20


class GameSettings(BaseModel):
    address: str = "localhost"
    bind_address: str = ""
    port: int = DEFAULT_PORT
    turn_seconds: int = DEFAULT_TURN_SECONDS
    tick_seconds: float = 1.0
    connect_timeout: Optional[float] = None

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not (1 <= value <= 65535):
            raise ConfigError(f"Port must lie between 1 and 65535, got {value}.")
        return value

    @field_validator("turn_seconds", "tick_seconds")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ConfigError(f"Clock settings must be positive, got {value}.")
        return value

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> Self:
        """Read NETCHESS_* variables. Anything not set keeps its default."""
        environ = os.environ if environ is None else environ
        fields = {
            "address": "ADDRESS",
            "port": "PORT",
            "turn_seconds": "TURN_SECONDS",
            "tick_seconds": "TICK_SECONDS",
            "connect_timeout": "CONNECT_TIMEOUT",
        }
        values = {
            field: environ[ENV_PREFIX + suffix]
            for field, suffix in fields.items()
            if ENV_PREFIX + suffix in environ
        }
        try:
            return cls.model_validate(values)
        except ValueError as exc:
            # pydantic's ValidationError (unparseable numbers etc.)
            raise ConfigError(str(exc)) from exc

    def with_overrides(self, **overrides: object) -> Self:
        """Apply the non-None values, e.g. the command line flags."""
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return type(self).model_validate(values)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
