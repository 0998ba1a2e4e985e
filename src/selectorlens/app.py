from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, List, Optional

from selectorlens.core.handlers.config_handler import handle_config
from selectorlens.core.handlers.scan_handler import handle_scan, USAGE as SCAN_USAGE
from selectorlens.core.managers.config_manager import config_manager
from selectorlens.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

COMMANDS: Dict[str, Callable[..., int]] = {
    "scan": handle_scan,
    "config": handle_config,
}

HELP_TEXT = f"""
selectorlens - cross-reference markup against script selectors and SEO essentials

Commands:
{SCAN_USAGE}

  config list | config get <key>
                      Show the settings loaded from settings.json.
""".strip()


def _setup_logging() -> None:
    """Initialize logging based on configuration."""
    configure_logger(
        config_manager.get_nested("debug.level", "WARNING"),
        module_specific_levels=config_manager.get_nested("debug.modules"),
        silenced_loggers=config_manager.get_nested("debug.silenced"),
    )


def run(argv: List[str], stdin: Optional[str] = None) -> int:
    """Dispatches a single command line to its handler and returns the exit code."""
    if not argv or argv[0] in ("-h", "--help", "help"):
        print(HELP_TEXT)
        return 0

    name, args = argv[0], argv[1:]
    handler = COMMANDS.get(name)
    if handler is None:
        print(f"Unknown command: '{name}'. Type 'selectorlens help' for a list of commands.")
        return 2

    logger.debug("Running command '%s' with args %s", name, args)
    return handler(args, stdin)


def main() -> None:
    _setup_logging()
    argv = sys.argv[1:]
    # Only touch stdin when a command asks for it
    stdin = sys.stdin.read() if "-" in argv else None
    sys.exit(run(argv, stdin))


if __name__ == "__main__":
    main()
