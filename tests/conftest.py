"""Test configuration and fixtures."""

import shutil
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Optional

import pytest
from click.testing import CliRunner

from gitprofile.config import CONFIG_DIR_ENV, Config, Profile, save_config
from gitprofile.exceptions import GitConfigError
from gitprofile.git import Scope


class FakeGitConfig:
    """In-memory stand-in for GitConfig."""

    def __init__(self, git_dir: Optional[Path] = None) -> None:
        self.values: dict[Scope, dict[str, str]] = {Scope.LOCAL: {}, Scope.GLOBAL: {}}
        self.calls: list[tuple] = []
        self.fail_keys: set[str] = set()
        self._git_dir = git_dir

    def set_config(self, scope: Scope, key: str, value: str) -> None:
        self.calls.append(("set", scope, key, value))
        if key in self.fail_keys:
            raise GitConfigError(f"git config {key} exited with status 1")
        self.values[scope][key] = value

    def get_config(self, key: str, scope: Optional[Scope] = None) -> str:
        if scope is None:
            value = self.values[Scope.LOCAL].get(key, self.values[Scope.GLOBAL].get(key))
        else:
            value = self.values[scope].get(key)
        if value is None:
            raise GitConfigError(f"{key} is not set")
        return value

    def get_config_or_none(self, key: str, scope: Optional[Scope] = None) -> Optional[str]:
        try:
            return self.get_config(key, scope) or None
        except GitConfigError:
            return None

    def unset_config(self, scope: Scope, key: str) -> bool:
        self.calls.append(("unset", scope, key))
        return self.values[scope].pop(key, None) is not None

    def git_dir(self) -> Path:
        if self._git_dir is None:
            raise GitConfigError("fatal: not a git repository (or any of the parent directories): .git")
        return self._git_dir


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the profiles file at a temporary directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    monkeypatch.setenv(CONFIG_DIR_ENV, str(directory))
    return directory


@pytest.fixture
def config_path(config_dir: Path) -> Path:
    """Path of the profiles file inside the temporary config directory."""
    return config_dir / "config.json"


@pytest.fixture
def fake_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeGitConfig:
    """Replace git access with an in-memory fake."""
    fake = FakeGitConfig(git_dir=tmp_path / "repo" / ".git")
    monkeypatch.setattr("gitprofile.profile.GitConfig", lambda: fake)
    return fake


@pytest.fixture
def sample_profiles(config_dir: Path, config_path: Path) -> Config:
    """Store the alice and bob profiles."""
    config = Config(
        profiles={
            "alice": Profile(id="alice", git_user="Alice A", git_email="a@x.com"),
            "bob": Profile(
                id="bob",
                git_user="Bob B",
                git_email="b@x.com",
                ssh_key_path="/home/bob/.ssh/id_bob",
            ),
        }
    )
    save_config(config, config_path)
    return config


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Create a real repository with an isolated global config and cd into it."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")

    repo = tmp_path / "repo"
    subprocess.run(["git", "init", "-q", str(repo)], check=True)
    monkeypatch.chdir(repo)
    yield repo


@pytest.fixture
def read_git_config() -> Callable[..., Optional[str]]:
    """Read a key with the real git binary, None when unset."""
    def read(*args: str) -> Optional[str]:
        result = subprocess.run(
            ["git", "config", *args],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip()
    return read
