# src/scanner/script/extractor.py
import logging
import re
from typing import List, Literal, Optional, Pattern, Tuple

from scanner.dom.models import CamelModel

logger = logging.getLogger(__name__)


class SelectorReference(CamelModel):
    """A selector literal found in script text, with the matched source for provenance."""
    kind: Literal["id", "css"]
    raw_text: str
    matched_snippet: str
    ordinal_index: int

    @property
    def key(self) -> str:
        """Normalized lookup key: '#name' for id lookups, the raw selector otherwise."""
        if self.kind == "id":
            return f"#{self.raw_text}"
        return self.raw_text


# getElementById('id'), any of the three quote characters
ID_LOOKUP_RE = re.compile(r"""getElementById\s*\(\s*['"`]([^'"`]+)['"`]\s*\)""")

# querySelector / querySelectorAll, selector text taken verbatim
QUERY_SELECTOR_RE = re.compile(r"""querySelector(?:All)?\s*\(\s*(['"`])(.*?)\1\s*\)""", re.DOTALL)

# $('#id'), $('.class'), ...
SHORTHAND_CALL_RE = re.compile(r"""\$\s*\(\s*(['"`])(.*?)\1\s*\)""", re.DOTALL)

# (pattern, capture group, kind), applied in this order
MATCHERS: List[Tuple[Pattern, int, str]] = [
    (ID_LOOKUP_RE, 1, "id"),
    (QUERY_SELECTOR_RE, 2, "css"),
    (SHORTHAND_CALL_RE, 2, "css"),
]


def extract_selectors_from_script(script: Optional[str]) -> List[SelectorReference]:
    """
    Enumerates selector references in script text with regex heuristics.

    Every matcher runs over the whole text independently; results are grouped
    per matcher in the order listed in MATCHERS, each group in order of
    appearance. Matches inside strings or comments are not filtered out.

    Args:
        script (Optional[str]): Raw script source; None is treated as "".

    Returns:
        List[SelectorReference]: One entry per match, never deduplicated.
    """
    text = script or ""
    references: List[SelectorReference] = []

    for pattern, group, kind in MATCHERS:
        for match in pattern.finditer(text):
            references.append(SelectorReference(
                kind=kind,
                raw_text=match.group(group),
                matched_snippet=match.group(0),
                ordinal_index=len(references),
            ))

    logger.debug("Extracted %d selector references from script", len(references))
    return references
