"""git-profile - switch between multiple git identities per repository."""

from gitprofile.cli import cli
from gitprofile.config import Config, Profile, load_config, save_config
from gitprofile.profile import ProfileManager
from gitprofile.version import __version__

__all__ = [
    "Config",
    "Profile",
    "ProfileManager",
    "__version__",
    "cli",
    "load_config",
    "save_config",
]
