# src/selectorlens/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and user paths.
    """

    @staticmethod
    def get_shell_package_root() -> Path:
        """Returns the directory of the installed 'selectorlens' package."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_shell_package_root() / "settings.json"

    @staticmethod
    def get_user_documents_dir() -> Path:
        """
        Returns the absolute path to the current user's Documents directory.
        """
        return Path.home() / "Documents"

    @staticmethod
    def resolve_output_path(path_str: str) -> Path:
        """
        Resolves an export target. Bare file names land in the Documents folder,
        anything with a directory part is taken relative to the working directory.
        """
        path = Path(path_str).expanduser()
        if path.is_absolute() or path.parent != Path("."):
            return path
        return PathUtils.get_user_documents_dir() / path
