# src/scanner/dom/builder.py
import logging
from collections import Counter
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from .models import MarkupDocument, MarkupIndex

logger = logging.getLogger(__name__)


class MarkupBuilder:
    """
    Builder responsible for parsing raw markup into a MarkupDocument.
    It keeps the parsed tree for selector queries and indexes every id,
    class token and data-attribute found on its elements.
    """

    # html5lib repairs markup the way browsers do and never raises.
    TREE_BUILDER = "html5lib"

    def parse_doc(self, markup: Optional[str]) -> MarkupDocument:
        """
        Parses raw markup text into a MarkupDocument.

        Args:
            markup (Optional[str]): The raw markup; None and "" are accepted.

        Returns:
            MarkupDocument: The repaired tree and its selector index.
        """
        # Strip a BOM so it does not end up as text in <body>
        clean_markup = (markup or "").replace('\ufeff', '')
        soup = BeautifulSoup(clean_markup, self.TREE_BUILDER)

        index = self._build_index(soup)
        logger.debug(
            "Indexed markup: %d ids, %d classes, %d data-attributes",
            len(index.identifier_occurrences), len(index.class_tokens), len(index.data_attribute_selectors)
        )
        return MarkupDocument(soup=soup, index=index)

    def _build_index(self, soup: BeautifulSoup) -> MarkupIndex:
        ids: Counter = Counter()
        classes: Dict[str, None] = {}
        data_attrs: Dict[str, None] = {}

        for tag in soup.find_all(True):
            element_id = self._attr_text(tag.get('id'))
            if element_id:
                ids[f"#{element_id}"] += 1

            for token in self._class_tokens(tag):
                classes.setdefault(f".{token}", None)

            for name, value in tag.attrs.items():
                if name.startswith("data-"):
                    data_attrs.setdefault(f'[{name}="{self._attr_text(value)}"]', None)

        return MarkupIndex(
            identifier_occurrences=dict(ids),
            class_tokens=list(classes),
            data_attribute_selectors=list(data_attrs),
        )

    @staticmethod
    def _class_tokens(tag: Tag) -> List[str]:
        """Splits every class attribute value on whitespace, dropping empty tokens."""
        tokens = []
        for value in tag.get_attribute_list('class'):
            if value:
                tokens.extend(value.split())
        return tokens

    @staticmethod
    def _attr_text(value: Any) -> str:
        # bs4 hands multi-valued attributes back as lists
        if value is None:
            return ""
        if isinstance(value, list):
            return " ".join(value)
        return str(value)
