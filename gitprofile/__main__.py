"""Main entry point for the git-profile command."""

import logging
import sys

from .cli import cli
from .config import get_config_dir
from .exceptions import GitProfileError
from .ui_common import print_error

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Log to the config directory and to stderr."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        handlers.append(logging.FileHandler(get_config_dir() / "gitprofile.log"))
    except (GitProfileError, OSError) as e:
        print_error(f"Cannot open log file: {e}")

    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def main() -> None:
    """Main entry point."""
    setup_logging()
    logger.debug("Starting git-profile")
    cli(prog_name="git-profile")


if __name__ == "__main__":
    main()
