"""
Client configuration.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

__version__ = "0.3.0"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the PocketBase API client."""

    base_url: str
    timeout: float = 30.0
    verify_ssl: bool = True
    user_agent: str = f"pocketbase-client-python/{__version__}"
    debug: bool = False

    def __post_init__(self):
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """
        Build a configuration from environment variables.

        Reads ``POCKETBASE_URL`` (required), ``POCKETBASE_TIMEOUT``,
        ``POCKETBASE_VERIFY_SSL`` and ``POCKETBASE_DEBUG``.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Client configuration

        Raises:
            ConfigurationError: If the URL is missing or a value is malformed
        """
        env = os.environ if environ is None else environ

        base_url = env.get("POCKETBASE_URL", "").strip()
        if not base_url:
            raise ConfigurationError("POCKETBASE_URL is not set")

        kwargs = {"base_url": base_url}
        if env.get("POCKETBASE_TIMEOUT"):
            try:
                kwargs["timeout"] = float(env["POCKETBASE_TIMEOUT"])
            except ValueError:
                raise ConfigurationError(
                    f"POCKETBASE_TIMEOUT must be a number, got {env['POCKETBASE_TIMEOUT']!r}"
                )
        if env.get("POCKETBASE_VERIFY_SSL"):
            kwargs["verify_ssl"] = _parse_bool("POCKETBASE_VERIFY_SSL", env["POCKETBASE_VERIFY_SSL"])
        if env.get("POCKETBASE_DEBUG"):
            kwargs["debug"] = _parse_bool("POCKETBASE_DEBUG", env["POCKETBASE_DEBUG"])

        return cls(**kwargs)
