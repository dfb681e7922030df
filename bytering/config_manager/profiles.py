"""API for handling ring buffer configuration profiles."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from bytering.config_manager.buffer_config import RingBufferConfig
from bytering.config_manager.helpers import build_default_buffer_config, parse_bytes
from bytering.const import CONFIG_DIR_NAME, PROFILE_SUFFIX, PROFILES_DIR_NAME


class ProfileNotFound(Exception):
    """Raised when a requested profile cannot be found on disk."""


class ProfileAlreadyExist(Exception):
    """Raised when attempting to create a profile that already exists."""


class ProfileManager:
    """Manage ring buffer profiles stored on disk."""

    def __init__(
        self,
        home_path: Path | None = None,
    ) -> None:
        """Initialise ProfileManager."""
        self._home_path = home_path or Path.home()

    @property
    def home_path(self) -> Path:
        """Return the home path used for resolving configuration."""
        return self._home_path

    def _profiles_dir(self) -> Path:
        """Return the directory where profiles are stored."""
        return self._home_path / CONFIG_DIR_NAME / PROFILES_DIR_NAME

    def _get_profile_path(self, profile: str) -> Path:
        """Return the filesystem path for a given profile name.

        Creates the profiles directory if it does not exist yet.
        """
        profiles_dir = self._profiles_dir()
        profiles_dir.mkdir(parents=True, exist_ok=True)
        return profiles_dir / f"{profile}{PROFILE_SUFFIX}"

    def list_profiles(self) -> list[str]:
        """List available profile names.

        Returns:
            Sorted profile names without the ``.yaml`` suffix.
        """
        profiles_dir = self._profiles_dir()
        if not profiles_dir.exists():
            return []

        return sorted(
            path.stem
            for path in profiles_dir.iterdir()
            if path.is_file() and path.suffix == PROFILE_SUFFIX
        )

    def get_profile(self, profile: str | None = None) -> RingBufferConfig:
        """Load a profile configuration from disk.

        Args:
            profile: Name of the profile to load. ``None`` selects the
                built-in defaults.

        Returns:
            Parsed ring buffer configuration for the profile.

        Raises:
            ProfileNotFound:
                If the profile YAML file does not exist.
        """
        if profile is None:
            return build_default_buffer_config()

        profile_path = self._get_profile_path(profile)

        try:
            with profile_path.open("r") as profile_file:
                profile_data = yaml.safe_load(profile_file) or {}
        except FileNotFoundError as exc:
            raise ProfileNotFound(f"Profile {profile!r} not found.") from exc

        raw_capacity = profile_data.get("capacity")
        if isinstance(raw_capacity, str):
            profile_data["capacity"] = parse_bytes(raw_capacity)

        return RingBufferConfig(**profile_data)

    def create_profile(self, profile: str) -> None:
        """Create a new profile with default configuration values.

        Raises:
            ProfileAlreadyExist:
                If a profile with the same name already exists.
        """
        profile_path = self._get_profile_path(profile)
        buffer_config = build_default_buffer_config()

        try:
            with profile_path.open("x") as profile_file:
                yaml.safe_dump(buffer_config.model_dump(), profile_file)
        except FileExistsError as exc:
            raise ProfileAlreadyExist(f"Profile {profile!r} already exists.") from exc

    def update_profile(
        self, profile: str, updates: dict[str, Any]
    ) -> RingBufferConfig:
        """Update an existing profile with the provided field values.

        Args:
            profile: Name of the profile to update.
            updates: Mapping of field names to new values. Fields with a value of
                ``None`` are ignored and do not overwrite existing values.

        Returns:
            The updated ring buffer configuration.

        Raises:
            ProfileNotFound:
                If the profile YAML file does not exist.
        """
        current = self.get_profile(profile)
        filtered_updates = {
            name: value for name, value in updates.items() if value is not None
        }
        if isinstance(filtered_updates.get("capacity"), str):
            filtered_updates["capacity"] = parse_bytes(filtered_updates["capacity"])

        new_config = RingBufferConfig.model_validate(
            {**current.model_dump(), **filtered_updates}
        )

        with self._get_profile_path(profile).open("w") as profile_file:
            yaml.safe_dump(new_config.model_dump(), profile_file)

        return new_config
