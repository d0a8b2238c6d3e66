"""Repository hook installation."""

import logging
from pathlib import Path

from .exceptions import GitConfigError, HookError
from .git import GitConfig

logger = logging.getLogger(__name__)

HOOK_NAMES = ("prepare-commit-msg", "pre-push")

HOOK_SCRIPT = """#!/bin/sh
# git-profile hook: ensure correct profile before commit/push
git-profile ensure >/dev/null 2>&1 || true
"""


def install_hooks(git_config: GitConfig) -> Path:
    """Write the profile hooks into the current repository.

    Existing hooks with the same names are overwritten.

    Args:
        git_config: Accessor for the repository to install into

    Returns:
        The hooks directory
    """
    try:
        git_dir = git_config.git_dir()
    except GitConfigError as e:
        raise HookError(f"not a git repo? {e}") from e

    hooks_dir = git_dir / "hooks"
    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise HookError(str(e)) from e

    for name in HOOK_NAMES:
        path = hooks_dir / name
        try:
            path.write_text(HOOK_SCRIPT)
            path.chmod(0o755)
        except OSError as e:
            raise HookError(f"writing hook {name}: {e}") from e
        logger.debug(f"Wrote hook {path}")

    return hooks_dir
