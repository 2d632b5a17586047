"""Server configuration.

Values come from, in order of priority: command-line flags, environment
variables, then the defaults below.

    TASKAPI_HOST       Interface to bind (default: 0.0.0.0)
    TASKAPI_PORT       TCP port to listen on (default: 8080)
    TASKAPI_LOG_LEVEL  DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Configuration for the Task API server."""

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Create settings from environment variables.

        Raises ValueError when TASKAPI_PORT is not an integer.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        port = env.get("TASKAPI_PORT")
        try:
            port_value = int(port) if port else defaults.port
        except ValueError:
            raise ValueError(f"TASKAPI_PORT must be an integer, got {port!r}") from None
        return cls(
            host=env.get("TASKAPI_HOST", defaults.host),
            port=port_value,
            log_level=env.get("TASKAPI_LOG_LEVEL", defaults.log_level).upper(),
        )

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be between 0 and 65535, got {self.port}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
