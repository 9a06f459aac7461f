"""Configuration loader for the GDAX client.

Supports YAML format with environment variable interpolation.
"""
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .transport import DEFAULT_BASE_URL, SANDBOX_BASE_URL


@dataclass
class ExchangeConfig:
    """Exchange endpoint settings."""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10
    sandbox: bool = False

    @property
    def effective_base_url(self) -> str:
        if self.sandbox and self.base_url == DEFAULT_BASE_URL:
            return SANDBOX_BASE_URL
        return self.base_url


@dataclass
class RateLimitConfig:
    """Client-side rate-limit hook settings."""
    enabled: bool = False
    requests_per_second: int = 5
    max_wait_seconds: float = 60.0


@dataclass
class PollingConfig:
    """Defaults for the report polling helpers."""
    interval_seconds: float = 1.0
    max_interval_seconds: float = 30.0
    max_attempts: int = 60


@dataclass
class LoggingConfig:
    log_file: Optional[str] = "gdax_api.log"
    log_level: str = "INFO"


@dataclass
class ClientConfig:
    """Complete client configuration."""
    exchange: ExchangeConfig = field(default_factory=ExchangeConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str) -> "ClientConfig":
        """Load configuration from YAML file with env var interpolation.

        Args:
            config_path: Path to YAML config file

        Returns:
            ClientConfig instance

        Example YAML:
            exchange:
              sandbox: true
              timeout: 10
            rate_limit:
              enabled: true
              requests_per_second: 3
            logging:
              log_file: "${LOG_DIR}/gdax.log"
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with config_file.open("r") as f:
            raw = f.read()

        # Interpolate environment variables: ${VAR_NAME}
        for key, value in os.environ.items():
            raw = raw.replace(f"${{{key}}}", value)

        data = yaml.safe_load(raw) or {}

        return cls(
            exchange=ExchangeConfig(**data.get("exchange", {})),
            rate_limit=RateLimitConfig(**data.get("rate_limit", {})),
            polling=PollingConfig(**data.get("polling", {})),
            logging=LoggingConfig(**data.get("logging", {})),
        )

    def to_yaml(self, output_path: str) -> None:
        """Save configuration to YAML file."""
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with output_file.open("w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=False)
