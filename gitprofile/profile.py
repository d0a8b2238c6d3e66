"""Profile management module for git-profile."""

import logging
from pathlib import Path
from typing import Optional

from .config import Config, Profile, load_config, save_config
from .exceptions import GitConfigError, ProfileError
from .git import GitConfig, Scope

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_KEY = "gitprofile.default"
NO_PROFILES_MESSAGE = "no profiles configured; run `git-profile add` first"


def ssh_command(ssh_key_path: str) -> str:
    """Build the core.sshCommand value that pins git to one key."""
    return f"ssh -i {ssh_key_path} -F /dev/null"


class ProfileManager:
    """Manages stored profiles and applies them to git configuration."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        git_config: Optional[GitConfig] = None,
    ) -> None:
        """Initialize profile manager.

        Args:
            config_path: Profiles file, defaults to the per-user location
            git_config: Git configuration accessor
        """
        self.config_path = config_path
        self.git = git_config or GitConfig()
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Stored profiles, loaded from disk on first access."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def profiles(self) -> dict[str, Profile]:
        return self.config.profiles

    def add_profile(
        self,
        profile_id: str,
        name: str,
        email: str,
        ssh_key_path: Optional[str] = None,
    ) -> Profile:
        """Create and persist a new profile."""
        if not profile_id or not name or not email:
            raise ProfileError("id, name and email are required")

        if profile_id in self.profiles:
            raise ProfileError(f'profile "{profile_id}" already exists', profile_id=profile_id)

        profile = Profile(
            id=profile_id,
            git_user=name,
            git_email=email,
            ssh_key_path=ssh_key_path or None,
        )
        self.profiles[profile_id] = profile
        save_config(self.config, self.config_path)

        logger.debug(f"Added profile {profile_id}")
        return profile

    def get_profile(self, profile_id: str) -> Profile:
        """Get a profile by id."""
        if profile_id not in self.profiles:
            raise ProfileError(f'profile "{profile_id}" not found', profile_id=profile_id)
        return self.profiles[profile_id]

    def list_profiles(self) -> list[Profile]:
        """Get all profiles, sorted by id."""
        return [self.profiles[profile_id] for profile_id in self.config.sorted_ids()]

    def require_profiles(self) -> list[Profile]:
        """Get all profiles, failing when none are configured."""
        profiles = self.list_profiles()
        if not profiles:
            raise ProfileError(NO_PROFILES_MESSAGE)
        return profiles

    def apply_profile(self, profile: Profile, scope: Scope) -> None:
        """Write a profile's identity into git configuration.

        user.name and user.email are always written. core.sshCommand is set
        when the profile has a key, otherwise any repository-level value is
        removed so that an earlier key-based profile does not linger.
        Nothing is rolled back if a later write fails.

        Args:
            profile: Profile to apply
            scope: Repository or global configuration
        """
        logger.debug(f"Applying profile {profile.id} to {scope} config")

        for key, value in (("user.name", profile.git_user), ("user.email", profile.git_email)):
            try:
                self.git.set_config(scope, key, value)
            except GitConfigError as e:
                raise GitConfigError(f"setting {key}: {e}", details=e.details) from e

        if profile.ssh_key_path:
            try:
                self.git.set_config(scope, "core.sshCommand", ssh_command(profile.ssh_key_path))
            except GitConfigError as e:
                raise GitConfigError(f"setting core.sshCommand: {e}", details=e.details) from e
        elif scope is not Scope.GLOBAL:
            self.git.unset_config(Scope.LOCAL, "core.sshCommand")

    def use_profile(self, profile_id: str, scope: Scope) -> Profile:
        """Look up a profile and apply it."""
        profile = self.get_profile(profile_id)
        self.apply_profile(profile, scope)
        return profile

    def set_default(self, profile_id: str, scope: Scope) -> None:
        """Record a profile id as the default in git configuration."""
        self.get_profile(profile_id)
        self.git.set_config(scope, DEFAULT_PROFILE_KEY, profile_id)

    def get_default(self, scope: Scope) -> Optional[str]:
        """Get the default profile id stored at a scope, if any."""
        return self.git.get_config_or_none(DEFAULT_PROFILE_KEY, scope)

    def resolve_default(self) -> Optional[Profile]:
        """Find the default profile for the current repository.

        The repository default wins over the global one. A default naming a
        profile that no longer exists is skipped.

        Returns:
            The resolved profile, or None if a choice must be made
        """
        for scope in (Scope.LOCAL, Scope.GLOBAL):
            default_id = self.get_default(scope)
            if not default_id:
                continue
            if default_id in self.profiles:
                logger.debug(f"Using {scope} default profile {default_id}")
                return self.profiles[default_id]
            logger.debug(f"Ignoring unknown {scope} default profile {default_id}")
        return None

    def select_profile(self, selection: str) -> Profile:
        """Pick a profile by its 1-based position in sorted id order.

        Raises:
            ProfileError: If the selection is empty, not a number or out of range
        """
        profiles = self.require_profiles()
        selection = selection.strip()
        if not selection:
            raise ProfileError("no selection made")

        # int() would also accept "1_0" and non-ASCII digits
        if not (selection.isascii() and selection.isdigit()):
            raise ProfileError("invalid selection")

        choice = int(selection)
        if choice < 1 or choice > len(profiles):
            raise ProfileError("invalid selection")
        return profiles[choice - 1]
