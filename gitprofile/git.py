"""Git configuration management through the git binary."""

import logging
import os
import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional

# Without git on PATH, report the failure per command instead of at import
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

import git  # noqa: E402

from .exceptions import GitConfigError

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    """Which git configuration file a write targets."""
    LOCAL = "local"
    GLOBAL = "global"

    @classmethod
    def from_str(cls, value: str) -> "Scope":
        """Anything other than "global" is treated as the repository scope."""
        return cls.GLOBAL if value.strip().lower() == "global" else cls.LOCAL

    def __str__(self) -> str:
        return self.value


class GitConfig:
    """Reads and writes git configuration keys for the current repository."""

    def __init__(self, working_dir: Optional[Path] = None) -> None:
        """Initialize Git configuration manager.

        Args:
            working_dir: Directory git runs in, defaults to the process cwd
        """
        self.working_dir = working_dir
        self._git = git.Git(working_dir)

    def set_config(self, scope: Scope, key: str, value: str) -> None:
        """Set a configuration key.

        git's own output is not captured so that its error messages reach
        the user directly.
        """
        args = ["git", "config"]
        if scope is Scope.GLOBAL:
            args.append("--global")
        args.extend([key, value])

        logger.debug(f"Running {' '.join(args)}")
        try:
            subprocess.run(args, check=True, cwd=self.working_dir)
        except subprocess.CalledProcessError as e:
            raise GitConfigError(f"git config {key} exited with status {e.returncode}") from e
        except OSError as e:
            raise GitConfigError(f"failed to run git: {e}") from e

    def get_config(self, key: str, scope: Optional[Scope] = None) -> str:
        """Get a configuration key.

        Args:
            key: Dotted configuration key
            scope: Restrict the lookup to one file, or None for the
                effective value git would use

        Returns:
            The trimmed value

        Raises:
            GitConfigError: If the key is unset or git fails
        """
        args = []
        if scope is not None:
            args.append(f"--{scope.value}")
        args.extend(["--get", key])

        try:
            value = self._git.config(*args)
        except git.CommandError as e:
            raise GitConfigError(f"{key} is not set", details=str(e)) from e
        return value.strip()

    def get_config_or_none(self, key: str, scope: Optional[Scope] = None) -> Optional[str]:
        """Get a configuration key, returning None when unset or empty."""
        try:
            value = self.get_config(key, scope)
        except GitConfigError:
            return None
        return value or None

    def unset_config(self, scope: Scope, key: str) -> bool:
        """Remove a configuration key, ignoring failures.

        Returns:
            True if git removed the key
        """
        args = ["git", "config"]
        if scope is Scope.GLOBAL:
            args.append("--global")
        args.extend(["--unset", key])

        try:
            result = subprocess.run(
                args,
                cwd=self.working_dir,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug(f"Could not unset {key}: {e}")
            return False
        logger.debug(f"git config --unset {key} exited with {result.returncode}")
        return result.returncode == 0

    def git_dir(self) -> Path:
        """Locate the repository's git directory."""
        try:
            output = self._git.rev_parse("--git-dir")
        except git.CommandError as e:
            raise GitConfigError(str(e).strip()) from e
        path = Path(output.strip())
        if self.working_dir is not None and not path.is_absolute():
            path = Path(self.working_dir) / path
        return path
