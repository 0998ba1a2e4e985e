# src/scanner/dom/models.py
from typing import Optional, List, Dict, Literal

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Keys with one of these prefixes can be resolved against the markup index.
CHECKED_PREFIXES = ("#", ".", "[data-")

Severity = Literal["error", "warn", "info"]


class CamelModel(BaseModel):
    """Base for every report entity: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MarkupIndex(CamelModel):
    """
    Normalized index of the selectors a markup document can satisfy.

    Identifiers keep their occurrence count (value -> count) so duplicate ids
    survive indexing. Class tokens and data-attribute selectors are distinct
    values kept in first-seen order.
    """
    identifier_occurrences: Dict[str, int] = Field(default_factory=dict)
    class_tokens: List[str] = Field(default_factory=list)
    data_attribute_selectors: List[str] = Field(default_factory=list)

    @property
    def total_selectors(self) -> int:
        """Distinct identifiers + distinct classes + distinct data-attributes."""
        return len(self.identifier_occurrences) + len(self.class_tokens) + len(self.data_attribute_selectors)

    def lookup(self, key: str) -> Optional[bool]:
        """
        Resolves a normalized selector key against the index.

        Returns:
            Optional[bool]: True/False for keys with a checked prefix,
                            None when the key cannot be checked at all.
        """
        if key.startswith("#"):
            return key in self.identifier_occurrences
        if key.startswith("."):
            return key in self.class_tokens
        if key.startswith("[data-"):
            return key in self.data_attribute_selectors
        return None


class MarkupDocument(BaseModel):
    """Parsed markup tree together with its selector index."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    soup: BeautifulSoup
    index: MarkupIndex = Field(default_factory=MarkupIndex)


class CriticalElementCheck(CamelModel):
    label: str
    selector: str
    present: bool


class StructuredDataRecord(CamelModel):
    type_name: str = "Unknown"


class Finding(CamelModel):
    """A single result of the rule engine."""
    rule_id: str
    severity: Severity
    target_type: Optional[str] = None
    target_name: Optional[str] = None
    message: str
    snippet: Optional[str] = None


class SeoReport(CamelModel):
    critical: List[CriticalElementCheck] = Field(default_factory=list)
    jsonld: List[StructuredDataRecord] = Field(default_factory=list)
    microdata: List[str] = Field(default_factory=list)
    rdfa: List[str] = Field(default_factory=list)


class GraphNode(CamelModel):
    id: str
    label: str
    side: Literal["script", "markup"]


class GraphEdge(CamelModel):
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    ok: bool


class ReferenceGraph(CamelModel):
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)
