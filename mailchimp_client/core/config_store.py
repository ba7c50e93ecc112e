"""Configuration from the environment and the saved CLI profile."""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from .dispatcher import DEFAULT_TIMEOUT
from .models import ConfigError

logger = logging.getLogger(__name__)

PROFILE_FILE = "profile.json"
PROFILE_MODE = 0o600


@dataclass
class ClientSettings:
    """Everything needed to construct a client."""
    api_key: str
    endpoint: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT
    debug: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def get_base_dir() -> Path:
    """
    Get the base directory for storing configuration.

    The directory is determined by:
    1. Environment variable MAILCHIMP_CLIENT_HOME if set
    2. Otherwise, ~/.mailchimp_client

    The directory is created if it does not exist.

    Returns:
        Path to the base directory
    """
    env_home = os.environ.get("MAILCHIMP_CLIENT_HOME")
    if env_home:
        base_dir = Path(env_home)
    else:
        base_dir = Path.home() / ".mailchimp_client"

    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir


def profile_path() -> Path:
    return get_base_dir() / PROFILE_FILE


def save_profile(settings: ClientSettings) -> Path:
    """
    Save client settings as the CLI profile.

    Returns:
        Path to the saved file
    """
    path = profile_path()
    try:
        # The profile holds a credential
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PROFILE_MODE)
        with os.fdopen(fd, "w") as f:
            json.dump(settings.to_dict(), f, indent=2)
        # os.open only applies the mode when it creates the file
        path.chmod(PROFILE_MODE)
    except OSError as e:
        raise ConfigError(f"Failed to save profile to {path}: {e}") from e

    logger.debug(f"Saved profile to {path}")
    return path


def load_profile() -> dict[str, Any]:
    """
    Load the saved CLI profile.

    Returns:
        The profile as a dictionary, empty if no profile was saved

    Raises:
        ConfigError: If the file exists but is not valid JSON
    """
    path = profile_path()
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load profile from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Profile {path} must contain a JSON object")

    logger.debug(f"Loaded profile from {path}")
    return data


def _env_settings() -> dict[str, Any]:
    env: dict[str, Any] = {}
    if os.environ.get("MAILCHIMP_API_KEY"):
        env["api_key"] = os.environ["MAILCHIMP_API_KEY"]
    if os.environ.get("MAILCHIMP_ENDPOINT"):
        env["endpoint"] = os.environ["MAILCHIMP_ENDPOINT"]
    if os.environ.get("MAILCHIMP_TIMEOUT"):
        try:
            env["timeout_seconds"] = float(os.environ["MAILCHIMP_TIMEOUT"])
        except ValueError as e:
            raise ConfigError(f"MAILCHIMP_TIMEOUT must be a number: {e}") from e
    if os.environ.get("MAILCHIMP_DEBUG"):
        env["debug"] = os.environ["MAILCHIMP_DEBUG"].lower() in ("1", "true", "yes")
    return env


def load_settings(use_profile: bool = True, **overrides: Any) -> ClientSettings:
    """
    Resolve client settings.

    Explicit overrides win over environment variables, which win over the
    saved profile. Overrides that are None are ignored.

    Raises:
        ConfigError: If no API key can be found
    """
    merged: dict[str, Any] = {}
    if use_profile:
        merged.update(load_profile())
    merged.update(_env_settings())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    if not merged.get("api_key"):
        raise ConfigError(
            "No API key configured. Set MAILCHIMP_API_KEY or run 'mailchimp-client configure'."
        )

    return ClientSettings(
        api_key=merged["api_key"],
        endpoint=merged.get("endpoint"),
        timeout_seconds=float(merged.get("timeout_seconds", DEFAULT_TIMEOUT)),
        debug=bool(merged.get("debug", False)),
    )
