import logging
from typing import List

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Elements likely to render above the fold
ABOVE_FOLD_SELECTOR = "h1, header, nav, .hero, .header, .nav"

# Literal substrings only; "opacity: 0" (with a space) is not detected.
HIDING_STYLES = ("display:none", "visibility:hidden", "opacity:0")

SNIPPET_LENGTH = 120


class VisibilityService:
    """Flags above-the-fold candidates that are hidden via inline style or the hidden attribute."""

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    def hidden_above_fold(self) -> List[str]:
        """
        Returns:
            List[str]: Serialized markup of each hidden candidate, truncated to 120 characters.
        """
        hidden = [str(el)[:SNIPPET_LENGTH] for el in self.soup.select(ABOVE_FOLD_SELECTOR) if self.is_hidden(el)]
        if hidden:
            logger.debug("Found %d hidden above-the-fold elements", len(hidden))
        return hidden

    @staticmethod
    def is_hidden(el: Tag) -> bool:
        style = (el.get("style") or "").lower()
        if any(marker in style for marker in HIDING_STYLES):
            return True
        return el.has_attr("hidden")
