import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from scanner.dom.builder import MarkupBuilder
from scanner.dom.core import RuleContext
from scanner.dom.models import Finding
from scanner.dom.rngine import RNGINE
from scanner.dom.rules.selector_mismatch import RULE_ID as SELECTOR_MISMATCH
from scanner.model import ScanConfig, ScanReport, SummaryCounters
from scanner.script.extractor import extract_selectors_from_script
from scanner.services.graph_service import GraphService
from scanner.services.seo_detect_service import SeoDetectService
from scanner.services.visibility_service import VisibilityService

logger = logging.getLogger(__name__)

ConfigInput = Union[ScanConfig, Mapping[str, Any], None]


class ScanController:
    """
    Orchestrates one scan: indexing, selector extraction, SEO detection,
    visibility heuristic, rule evaluation and graph building.

    A controller holds no per-scan state, so one instance can serve any
    number of scans.
    """

    def __init__(self):
        self.builder = MarkupBuilder()
        self.engine = RNGINE()

    def run_scan(self, markup: Optional[str], script: Optional[str], config: ConfigInput = None) -> ScanReport:
        """
        Cross-references markup against script and returns the complete report.

        Args:
            markup (Optional[str]): Raw markup text, may be empty or malformed.
            script (Optional[str]): Raw script text, may be empty.
            config (ConfigInput): ScanConfig, a mapping in the settings shape, or None for defaults.

        Returns:
            ScanReport: Findings, summary counters, SEO panel data and the reference graph.
        """
        scan_config = ScanConfig.coerce(config)

        # --- 1. Parse & index ---
        doc = self.builder.parse_doc(markup)
        references = extract_selectors_from_script(script)

        # --- 2. SEO features & visibility ---
        seo = SeoDetectService(doc.soup).detect(scan_config.seo.critical_selectors)
        hidden = VisibilityService(doc.soup).hidden_above_fold()

        # --- 3. Rules ---
        ctx = RuleContext(index=doc.index, references=references, seo=seo, config=scan_config)
        findings = self.engine.run_rules(ctx)

        # --- 4. Graph ---
        graph = GraphService(doc.index).build(references)

        summary = self._summarize(doc.index.total_selectors, findings, seo.critical, hidden)
        logger.info(
            "Scan complete: %d findings, %d broken references, %d critical SEO elements missing",
            len(findings), summary.broken_references, summary.seo_critical_missing
        )

        return ScanReport(
            findings=findings,
            summary=summary,
            seo=seo,
            graph=graph,
            hidden_snippets=hidden,
        )

    @staticmethod
    def _summarize(total_selectors: int, findings: List[Finding], critical: list, hidden: List[str]) -> SummaryCounters:
        return SummaryCounters(
            total_selectors=total_selectors,
            broken_references=sum(
                1 for f in findings if f.rule_id == SELECTOR_MISMATCH and f.severity == "error"
            ),
            seo_critical_missing=sum(1 for c in critical if not c.present),
            hidden_above_fold=len(hidden),
        )


def run_all_checks(markup: Optional[str] = "", script: Optional[str] = "", config: ConfigInput = None) -> Dict[str, Any]:
    """Runs a scan and returns the serialized report (camelCase keys)."""
    return ScanController().run_scan(markup, script, config).to_dict()
