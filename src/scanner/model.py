import json
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ConfigDict, Field

from scanner.dom.models import CamelModel, Finding, ReferenceGraph, SeoReport


class NamingConfig(CamelModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enforce_bem: bool = Field(default=False, alias="enforceBEM")


class SeoConfig(CamelModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    critical_selectors: List[str] = Field(default_factory=list, alias="criticalSelectors")


class ScanConfig(CamelModel):
    """
    Read-only configuration snapshot for one scan.
    Mirrors the 'scan' section of settings.json.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    naming: NamingConfig = Field(default_factory=NamingConfig)
    seo: SeoConfig = Field(default_factory=SeoConfig)

    @classmethod
    def coerce(cls, config: Union["ScanConfig", Mapping[str, Any], None]) -> "ScanConfig":
        """Accepts a ScanConfig, a plain mapping in the settings shape, or None."""
        if config is None:
            return cls()
        if isinstance(config, ScanConfig):
            return config
        return cls.model_validate(dict(config))


class SummaryCounters(CamelModel):
    total_selectors: int = 0
    broken_references: int = 0
    seo_critical_missing: int = 0
    hidden_above_fold: int = 0


class ScanReport(CamelModel):
    """
    Result of a single scan invocation.

    'hidden_snippets' holds the truncated markup of hidden above-the-fold
    candidates. It only feeds the summary counter and the text view and is
    not part of the serialized report.
    """
    findings: List[Finding] = Field(default_factory=list)
    summary: SummaryCounters = Field(default_factory=SummaryCounters)
    seo: SeoReport = Field(default_factory=SeoReport)
    graph: ReferenceGraph = Field(default_factory=ReferenceGraph)
    hidden_snippets: List[str] = Field(default_factory=list, exclude=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
