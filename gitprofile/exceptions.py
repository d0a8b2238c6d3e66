"""Custom exceptions for git-profile."""


class GitProfileError(Exception):
    """Base exception for git-profile."""

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConfigError(GitProfileError):
    """Errors reading or writing the profiles file."""
    pass


class ProfileError(GitProfileError):
    """Profile-related errors."""

    def __init__(self, message: str, profile_id: str | None = None) -> None:
        self.profile_id = profile_id
        super().__init__(message)


class GitConfigError(GitProfileError):
    """Errors related to Git configuration."""
    pass


class HookError(GitProfileError):
    """Errors installing repository hooks."""
    pass
