"""Secrets management: load API credentials from environment or config file.

Priority order:
1. Environment variables: GDAX_API_KEY, GDAX_API_SECRET, GDAX_API_PASSPHRASE
2. Config file: ~/.gdax_config.json or custom path via ENV GDAX_CONFIG_PATH
"""
import json
import os
from pathlib import Path
from typing import NamedTuple, Optional, Union

from .errors import InvalidCredentials


class GDAXCredentials(NamedTuple):
    api_key: str
    api_secret: Union[str, bytes]  # base64 string as issued, or raw key bytes
    passphrase: str


def load_credentials(
    config_path: Optional[str] = None,
) -> GDAXCredentials:
    """Load GDAX credentials from env or config file.

    Args:
        config_path: Optional override path to config file. If not provided,
                     checks GDAX_CONFIG_PATH env var, then ~/.gdax_config.json

    Returns:
        GDAXCredentials with api_key, api_secret, passphrase

    Raises:
        InvalidCredentials: If credentials are not found or incomplete
    """
    # Try environment variables first (highest priority)
    api_key = os.getenv("GDAX_API_KEY")
    api_secret = os.getenv("GDAX_API_SECRET")
    passphrase = os.getenv("GDAX_API_PASSPHRASE")

    if api_key and api_secret and passphrase:
        return GDAXCredentials(api_key=api_key, api_secret=api_secret, passphrase=passphrase)

    if config_path is None:
        config_path = os.getenv("GDAX_CONFIG_PATH")
    if config_path is None:
        config_path = str(Path.home() / ".gdax_config.json")

    config_file = Path(config_path)
    if config_file.exists():
        try:
            with config_file.open("r") as f:
                cfg = json.load(f)
        except (OSError, ValueError) as e:
            raise InvalidCredentials(f"Failed to load config from {config_path}: {e}") from e
        api_key = api_key or cfg.get("api_key")
        api_secret = api_secret or cfg.get("api_secret")
        passphrase = passphrase or cfg.get("passphrase")

    if not api_key or not api_secret or not passphrase:
        raise InvalidCredentials(
            "Missing GDAX credentials. Provide via:\n"
            "  - Environment: GDAX_API_KEY, GDAX_API_SECRET, GDAX_API_PASSPHRASE\n"
            f"  - Config file: {config_path}\n"
            "  - GDAX_CONFIG_PATH env var to override config location"
        )

    return GDAXCredentials(api_key=api_key, api_secret=api_secret, passphrase=passphrase)


def save_config(
    config_path: str,
    api_key: str,
    api_secret: str,
    passphrase: str,
) -> None:
    """Save credentials to a config file for later use.

    WARNING: Stores secrets in plaintext. The file is chmod 600 where supported.
    """
    config = {
        "api_key": api_key,
        "api_secret": api_secret,
        "passphrase": passphrase,
    }
    cfg_file = Path(config_path)
    cfg_file.parent.mkdir(parents=True, exist_ok=True)

    with cfg_file.open("w") as f:
        json.dump(config, f, indent=2)

    # Windows ignores most of the mode bits
    if os.name == "posix":
        cfg_file.chmod(0o600)
