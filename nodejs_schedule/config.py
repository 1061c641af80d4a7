"""Configuration for nodejs-schedule.

The tool can be configured via environment variables:
- NODEJS_SCHEDULE_URL: Override the schedule document location
  (default: the Node.js Release working group's schedule.json on GitHub)
- NODEJS_SCHEDULE_TIMEOUT: HTTP timeout in seconds (default: 30)
- LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default: INFO)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError
from .logging_config import logger

SCHEDULE_URL = "https://raw.githubusercontent.com/nodejs/Release/master/schedule.json"
DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
LOCALHOST_PATTERNS = ["127.0.0.1", "localhost", "0.0.0.0"]


@dataclass
class ScheduleConfig:
    """Configuration settings for fetching the schedule."""

    url: str = SCHEDULE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def validate(self) -> None:
        """
        Validate and normalize configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be a positive number of seconds, got {self.timeout}")

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level '{self.log_level}'. Expected one of: {', '.join(LOG_LEVELS)}")

        self._validate_url()

    def _validate_url(self) -> None:
        """
        Validate and normalize the schedule URL.

        Raises:
            ConfigurationError: If URL format is invalid
        """
        try:
            parsed = urlparse(self.url)
        except ValueError as e:
            raise ConfigurationError(f"Invalid schedule URL format: {e}")

        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError("Schedule URL must start with http:// or https://")

        if not parsed.netloc:
            raise ConfigurationError("Schedule URL must include a valid hostname")

        if parsed.scheme == "http" and not any(localhost in parsed.netloc for localhost in LOCALHOST_PATTERNS):
            logger.warning("Using HTTP (not HTTPS) to fetch the schedule - consider using HTTPS")

        # Remove trailing slash if present for consistency
        if self.url.endswith("/"):
            self.url = self.url.rstrip("/")


def parse_timeout(value: str) -> float:
    """
    Parse a timeout given as text.

    Raises:
        ConfigurationError: If the value is not a number
    """
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid timeout '{value}': expected a number of seconds")


def load_config(environ: Optional[Mapping[str, str]] = None) -> ScheduleConfig:
    """
    Load and validate configuration from environment variables.

    Args:
        environ: Mapping to read instead of os.environ

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    env = os.environ if environ is None else environ

    timeout_env = env.get("NODEJS_SCHEDULE_TIMEOUT")
    config = ScheduleConfig(
        url=env.get("NODEJS_SCHEDULE_URL") or SCHEDULE_URL,
        timeout=parse_timeout(timeout_env) if timeout_env else DEFAULT_TIMEOUT,
        log_level=env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
    )
    config.validate()
    return config
