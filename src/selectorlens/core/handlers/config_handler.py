# src/selectorlens/core/handlers/config_handler.py
import json
import logging
from typing import List, Optional

from selectorlens.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

USAGE = """
Usage:
  config list                Show the current configuration as JSON.
  config get <key>           Show a single value (e.g., scan.naming.enforceBEM).
"""


def handle_config(args: List[str], _stdin: Optional[str] = None) -> int:
    """Handles the 'config' command for viewing the loaded settings."""
    if not args:
        print(USAGE)
        return 1

    command = args[0]

    if command == "list":
        config_data = config_manager.get_all()
        print(json.dumps(config_data, indent=2))
        return 0

    if command == "get":
        if len(args) < 2:
            print("Usage: config get <key>")
            return 1
        value = config_manager.get_nested(args[1])
        if value is None:
            print(f"❌ Unknown config key '{args[1]}'.")
            return 1
        print(json.dumps(value, indent=2))
        return 0

    print(f"Unknown command: 'config {command}'.")
    return 1
