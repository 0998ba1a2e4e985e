import json
import logging
from typing import Any, Dict, List, Sequence

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from scanner.dom.models import CriticalElementCheck, SeoReport, StructuredDataRecord

logger = logging.getLogger(__name__)

JSONLD_CONTENT_TYPE = "application/ld+json"

# (selector, label), always evaluated before the configured selectors
BUILT_IN_CRITICAL_ELEMENTS = [
    ("title", "Page <title>"),
    ('meta[name="description"]', "Meta description"),
    ('link[rel="canonical"]', "Canonical link"),
    ('meta[property="og:title"]', "Open Graph title"),
    ("h1", "H1 present"),
]


class SeoDetectService:
    """
    Detects SEO features on a parsed markup tree: linked-data blocks,
    microdata and RDFa types, and the critical element checklist.
    """

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    def detect(self, critical_selectors: Sequence[str]) -> SeoReport:
        return SeoReport(
            jsonld=self.detect_jsonld(),
            microdata=self.detect_microdata(),
            rdfa=self.detect_rdfa(),
            critical=self.check_critical_elements(critical_selectors),
        )

    def detect_jsonld(self) -> List[StructuredDataRecord]:
        """
        Parses every JSON-LD block. Malformed blocks are skipped without a finding.
        A top-level list yields one record per item.
        """
        records: List[StructuredDataRecord] = []
        for block in self.soup.find_all('script', attrs={'type': JSONLD_CONTENT_TYPE}):
            raw = (block.string or "").strip() or "{}"
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                logger.debug("Skipping malformed JSON-LD block: %s", e)
                continue

            items = data if isinstance(data, list) else [data]
            for item in items:
                records.append(StructuredDataRecord(type_name=self._type_name(item)))
        return records

    @staticmethod
    def _type_name(item: Any) -> str:
        if not isinstance(item, dict):
            return "Unknown"
        value = item.get("@type")
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value if v)
        return str(value) if value else "Unknown"

    def detect_microdata(self) -> List[str]:
        types: Dict[str, None] = {}
        for el in self.soup.select("[itemscope][itemtype]"):
            item_type = el.get("itemtype")
            if item_type:
                types.setdefault(item_type, None)
        return list(types)

    def detect_rdfa(self) -> List[str]:
        types: Dict[str, None] = {}
        for el in self.soup.select("[typeof]"):
            type_of = el.get("typeof")
            if type_of:
                types.setdefault(type_of, None)
        return list(types)

    def check_critical_elements(self, critical_selectors: Sequence[str]) -> List[CriticalElementCheck]:
        """
        Tests the built-in checklist followed by the configured selectors.
        Order and duplicates are preserved.
        """
        items = list(BUILT_IN_CRITICAL_ELEMENTS) + [(s, s) for s in critical_selectors]
        return [
            CriticalElementCheck(label=label, selector=selector, present=self._exists(selector))
            for selector, label in items
        ]

    def _exists(self, selector: str) -> bool:
        try:
            return self.soup.select_one(selector) is not None
        except (SelectorSyntaxError, NotImplementedError) as e:
            # NotImplementedError: pseudo-elements such as ::before
            logger.warning("Invalid critical selector '%s' treated as missing: %s", selector, e)
            return False
