"""Command-line interface."""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

import click

from .exceptions import GitProfileError, ProfileError
from .git import Scope
from .hooks import install_hooks
from .profile import DEFAULT_PROFILE_KEY, ProfileManager
from .ui_common import console, err_console, print_error, print_info, print_success
from .version import __version__

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def handle_errors(f: F) -> F:
    """Decorator to report errors from CLI commands and exit with status 1."""
    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except GitProfileError as e:
            logger.debug(f"{type(e).__name__}: {e}")
            print_error(str(e), e.details)
            raise click.exceptions.Exit(1)
        except Exception as e:
            logger.error(f"Unexpected error: {str(e)}", exc_info=True)
            print_error(f"Unexpected error: {e}")
            raise click.exceptions.Exit(1)
    return cast(F, wrapper)


class ProfileGroup(click.Group):
    """Command group that prints usage and exits 1 on unknown commands."""

    def resolve_command(self, ctx: click.Context, args: list[str]) -> Any:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError:
            err_console.print(f"Unknown command: {args[0] if args else ''}\n", markup=False)
            click.echo(ctx.get_help())
            ctx.exit(1)


def get_profile_manager() -> ProfileManager:
    """Create a profile manager for the current directory."""
    return ProfileManager()


@click.group(
    cls=ProfileGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.version_option(__version__, prog_name="git-profile")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """git-profile - manage multiple git/GitHub identity profiles.

    Profiles are stored per user and applied to the current repository
    (or globally) through git config.
    """
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(1)


@cli.command()
@click.option("--id", "profile_id", help="Profile ID (e.g. work, personal)")
@click.option("--name", help="Git user.name")
@click.option("--email", help="Git user.email")
@click.option("--ssh-key", help="SSH key path (optional)")
@handle_errors
def add(
    profile_id: str | None = None,
    name: str | None = None,
    email: str | None = None,
    ssh_key: str | None = None,
) -> None:
    """Add a new identity profile."""
    manager = get_profile_manager()
    profile = manager.add_profile(profile_id or "", name or "", email or "", ssh_key)
    print_success(f'Added profile "{profile.id}"')


@cli.command("list")
@handle_errors
def list_profiles() -> None:
    """List configured profiles."""
    profiles = get_profile_manager().list_profiles()

    if not profiles:
        print_info("No profiles configured yet.")
        return

    console.print("[title]Configured profiles:[/title]")
    for p in profiles:
        ssh = p.ssh_key_path or "(default SSH)"
        print_info(f"  - {p.id}: {p.git_user} <{p.git_email}>, ssh={ssh}")


@cli.command()
@click.option("--global", "use_global", is_flag=True, help="Apply profile to global git config")
@click.argument("profile_id", required=False)
@handle_errors
def use(profile_id: str | None = None, use_global: bool = False) -> None:
    """Apply a profile to this repo or globally."""
    if not profile_id:
        raise ProfileError("usage: git-profile use [--global] <profile-id>")

    scope = Scope.GLOBAL if use_global else Scope.LOCAL
    get_profile_manager().use_profile(profile_id, scope)
    print_success(f'Applied profile "{profile_id}" to {scope} git config')


@cli.command()
@handle_errors
def current() -> None:
    """Show current git identity and defaults."""
    git_config = get_profile_manager().git

    name = git_config.get_config_or_none("user.name")
    email = git_config.get_config_or_none("user.email")
    if name is None and email is None:
        raise ProfileError("no user.name or user.email set in this repo")

    console.print("[title]Current git identity (this repo):[/title]")
    if name is not None:
        print_info(f"  user.name  = {name}")
    if email is not None:
        print_info(f"  user.email = {email}")

    ssh = git_config.get_config_or_none("core.sshCommand")
    print_info(f"  core.sshCommand = {ssh or '(default)'}")

    for scope in (Scope.LOCAL, Scope.GLOBAL):
        default_id = git_config.get_config_or_none(DEFAULT_PROFILE_KEY, scope)
        if default_id:
            print_info(f"  {DEFAULT_PROFILE_KEY} ({scope}) = {default_id}")


def choose_profile(manager: ProfileManager) -> None:
    """Prompt for a profile by number and apply it to the local repo."""
    profiles = manager.require_profiles()

    console.print("[title]Select profile:[/title]")
    for index, p in enumerate(profiles, start=1):
        print_info(f"  [{index}] {p.id}: {p.git_user} <{p.git_email}>")

    try:
        line = console.input("Enter number: ")
    except EOFError:
        line = ""

    profile = manager.select_profile(line)
    # choose never touches the global config
    manager.apply_profile(profile, Scope.LOCAL)
    print_success(f'Applied profile "{profile.id}" to local repo')


@cli.command()
@handle_errors
def choose() -> None:
    """Interactively choose a profile and apply locally."""
    choose_profile(get_profile_manager())


@cli.command("set-default")
@click.option("--global", "use_global", is_flag=True, help="Set as global default profile")
@click.argument("profile_id", required=False)
@handle_errors
def set_default(profile_id: str | None = None, use_global: bool = False) -> None:
    """Set per-repo or global default profile (stored in git config)."""
    if not profile_id:
        raise ProfileError("usage: git-profile set-default [--global] <profile-id>")

    scope = Scope.GLOBAL if use_global else Scope.LOCAL
    get_profile_manager().set_default(profile_id, scope)
    print_success(f'Set "{profile_id}" as {scope} default profile')


@cli.command()
@handle_errors
def ensure() -> None:
    """Apply repo default, then global default, otherwise prompt (used by hooks)."""
    manager = get_profile_manager()
    manager.require_profiles()

    profile = manager.resolve_default()
    if profile is None:
        choose_profile(manager)
        return

    manager.apply_profile(profile, Scope.LOCAL)
    print_success(f'Applied profile "{profile.id}" to local repo')


@cli.command("install-hooks")
@handle_errors
def install_hooks_command() -> None:
    """Install hooks so plain 'git commit' and 'git push' call 'git-profile ensure'."""
    hooks_dir = install_hooks(get_profile_manager().git)
    print_success(f"Installed git-profile hooks in {hooks_dir}")
    print_info("From now on, normal `git commit` and `git push` will apply/ask for a profile.")


@cli.command("help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Show this message."""
    click.echo(ctx.parent.get_help())
