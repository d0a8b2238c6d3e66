"""Profile storage for git-profile."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "gitprofile"
CONFIG_FILENAME = "config.json"
CONFIG_DIR_ENV = "GIT_PROFILE_CONFIG_DIR"


@dataclass(frozen=True)
class Profile:
    """A named git identity."""
    id: str
    git_user: str
    git_email: str
    ssh_key_path: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert profile to dictionary for serialization."""
        data = {
            "id": self.id,
            "git_user": self.git_user,
            "git_email": self.git_email,
        }
        if self.ssh_key_path:
            data["ssh_key_path"] = self.ssh_key_path
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create profile from dictionary."""
        return cls(
            id=data.get("id", ""),
            git_user=data.get("git_user", ""),
            git_email=data.get("git_email", ""),
            ssh_key_path=data.get("ssh_key_path") or None,
        )


@dataclass
class Config:
    """All stored profiles, keyed by id."""
    profiles: dict[str, Profile] = field(default_factory=dict)

    def sorted_ids(self) -> list[str]:
        return sorted(self.profiles)

    def to_dict(self) -> dict[str, Any]:
        return {
            "profiles": {
                profile_id: profile.to_dict()
                for profile_id, profile in self.profiles.items()
            }
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        profiles = data.get("profiles") or {}
        return cls(
            profiles={
                profile_id: Profile.from_dict(profile_data)
                for profile_id, profile_data in profiles.items()
            }
        )


def get_config_dir() -> Path:
    """Get the per-user configuration directory, creating it if needed."""
    override = os.environ.get(CONFIG_DIR_ENV)
    config_dir = Path(override) if override else Path(user_config_dir(APP_NAME))
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(str(e)) from e
    return config_dir


def default_config_path() -> Path:
    """Get the path of the profiles file."""
    return get_config_dir() / CONFIG_FILENAME


def load_config(path: Path | None = None) -> Config:
    """Load profiles from disk.

    A missing file yields an empty configuration. A file that is not valid
    JSON, or whose profiles are not JSON objects, raises ConfigError.

    Args:
        path: Profiles file, defaults to the per-user location

    Returns:
        Loaded configuration
    """
    path = path or default_config_path()
    logger.debug(f"Loading profiles from {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return Config()
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")

    profiles = data.get("profiles") or {}
    if not isinstance(profiles, dict):
        raise ConfigError(f"{path}: \"profiles\" must be a JSON object")
    for profile_id, record in profiles.items():
        if not isinstance(record, dict):
            raise ConfigError(f"{path}: profile \"{profile_id}\" must be a JSON object")
    return Config.from_dict(data)


def save_config(config: Config, path: Path | None = None) -> None:
    """Save profiles to disk.

    The document is written to a sibling temporary file which is then
    renamed over the target, so readers never see a partial write.

    Args:
        config: Configuration to save
        path: Profiles file, defaults to the per-user location
    """
    path = path or default_config_path()
    tmp = path.with_name(path.name + ".tmp")

    try:
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
            f.write("\n")
        os.replace(tmp, path)
    except OSError as e:
        raise ConfigError(str(e)) from e

    logger.debug(f"Saved {len(config.profiles)} profile(s) to {path}")
