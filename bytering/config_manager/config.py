"""Resolve ring buffer configuration from profile, environment, and overrides."""

from __future__ import annotations

import logging
import os
from typing import Any

from bytering.config_manager.buffer_config import RingBufferConfig
from bytering.config_manager.helpers import parse_bytes
from bytering.config_manager.profiles import ProfileManager
from bytering.const import CAPACITY_ENV_VAR, SHORT_TRANSFER_LOG_INTERVAL_ENV_VAR

logger = logging.getLogger(__name__)

_ENV_MAP: dict[str, str] = {
    "capacity": CAPACITY_ENV_VAR,
    "short_transfer_log_interval": SHORT_TRANSFER_LOG_INTERVAL_ENV_VAR,
}


class ConfigManager:
    """Build effective ring buffer configuration from profile, env, and overrides."""

    def __init__(
        self, profile_manager: ProfileManager, profile: str | None = None
    ) -> None:
        """Initialise ConfigManager.

        Args:
            profile_manager: ProfileManager instance
            profile: Name of the profile to load as the base configuration.
        """
        self.profile_manager = profile_manager
        self.profile = profile

    def _read_env_overrides(self) -> dict[str, Any]:
        """Read configuration overrides from environment variables.

        Malformed values are skipped with a warning.

        Returns:
            A dictionary of configuration field names to override values.
        """
        overrides: dict[str, Any] = {}

        for field_name, env_var_name in _ENV_MAP.items():
            env_value = os.getenv(env_var_name)
            if env_value is None:
                continue

            try:
                if field_name == "capacity":
                    overrides[field_name] = parse_bytes(env_value)
                else:
                    overrides[field_name] = int(env_value)
            except ValueError:
                logger.warning("Ignoring malformed %s=%r", env_var_name, env_value)

        return overrides

    def resolve_effective_config(
        self, overrides: dict[str, Any] | None = None
    ) -> RingBufferConfig:
        """Resolve the effective ring buffer configuration.

        Args:
            overrides: Optional explicit overrides; ``None`` values are ignored.

        Returns:
            The resolved, validated ``RingBufferConfig``.

        Raises:
            pydantic.ValidationError: If the merged values are invalid.
        """
        base_config = self.profile_manager.get_profile(self.profile)

        merged: dict[str, Any] = base_config.model_dump()
        merged.update(self._read_env_overrides())

        if overrides is not None:
            explicit = {
                name: value for name, value in overrides.items() if value is not None
            }
            if isinstance(explicit.get("capacity"), str):
                explicit["capacity"] = parse_bytes(explicit["capacity"])
            merged.update(explicit)

        return RingBufferConfig.model_validate(merged)
