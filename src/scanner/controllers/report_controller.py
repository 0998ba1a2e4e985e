import logging
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from scanner.dom.models import Finding
from scanner.dom.registry import RuleRegistry
from scanner.model import ScanReport

logger = logging.getLogger(__name__)

SEVERITIES = ("error", "warn", "info")

EXPORT_COLUMNS = ["Rule", "Severity", "Type", "Name", "Message", "Snippet"]


class ReportController:
    """
    Controller responsible for presenting a finished ScanReport:
    filtering findings, rendering a plain text view and exporting findings as a table.
    """

    def __init__(self, report: ScanReport):
        self.report = report
        RuleRegistry.discover()

    # --- FILTERING ---

    def filter_findings(
            self,
            severity: Optional[str] = None,
            rule_ids: Optional[Sequence[str]] = None
    ) -> List[Finding]:
        """
        Returns the findings matching the given severity and rule ids, order preserved.

        Raises:
            ValueError: On an unknown severity or rule id.
        """
        if severity is not None and severity not in SEVERITIES:
            raise ValueError(f"Unknown severity '{severity}'. Choose from: {', '.join(SEVERITIES)}")

        if rule_ids:
            known = RuleRegistry.get_all_rule_ids()
            unknown = [r for r in rule_ids if r not in known]
            if unknown:
                raise ValueError(f"Unknown rule id(s): {', '.join(unknown)}. Known rules: {', '.join(known)}")

        return [
            f for f in self.report.findings
            if (severity is None or f.severity == severity)
            and (not rule_ids or f.rule_id in rule_ids)
        ]

    # --- EXPORT ---

    def findings_dataframe(self, findings: Optional[List[Finding]] = None) -> pd.DataFrame:
        rows = [
            {
                "Rule": f.rule_id,
                "Severity": f.severity,
                "Type": f.target_type or "",
                "Name": f.target_name or "",
                "Message": f.message,
                "Snippet": f.snippet or "",
            }
            for f in (self.report.findings if findings is None else findings)
        ]
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def export_findings(self, path: Path, findings: Optional[List[Finding]] = None) -> Path:
        """
        Writes findings to CSV or Excel, chosen by the file suffix.

        Raises:
            ValueError: When the suffix is neither .csv nor .xlsx.
        """
        df = self.findings_dataframe(findings)
        suffix = path.suffix.lower()

        if suffix == ".csv":
            df.to_csv(path, index=False)
        elif suffix == ".xlsx":
            df.to_excel(path, index=False, sheet_name="findings")
        else:
            raise ValueError(f"Unsupported export format '{suffix}'. Use .csv or .xlsx")

        logger.info("Exported %d findings to %s", len(df), path)
        return path

    # --- TEXT VIEW ---

    def render_text(self, findings: Optional[List[Finding]] = None) -> str:
        """Renders the overview, findings, SEO checks and selector map as plain text."""
        r = self.report
        findings = r.findings if findings is None else findings
        s = r.summary

        lines: List[str] = []
        lines.append("== Overview ==")
        lines.append(f"Total selectors:        {s.total_selectors}")
        lines.append(f"Broken references:      {s.broken_references}")
        lines.append(f"SEO critical missing:   {s.seo_critical_missing}")
        lines.append(f"Hidden above-the-fold:  {s.hidden_above_fold}")
        for snippet in r.hidden_snippets:
            lines.append(f"  ~ {snippet}")
        lines.append("")

        lines.append(f"== Findings ({len(findings)}) ==")
        if not findings:
            lines.append("No findings.")
        for f in findings:
            target = " ".join(t for t in (f.target_type, f.target_name) if t)
            lines.append(f"{f.severity.upper():5} {f.rule_id:22} {target}")
            lines.append(f"      {f.message}")
            if f.snippet:
                lines.append(f"      > {' '.join(f.snippet.split())}")
        lines.append("")

        lines.append("== SEO Checks ==")
        for c in r.seo.critical:
            lines.append(f"[{'OK' if c.present else 'MISSING':7}] {c.label}")
        lines.append(f"JSON-LD:   {', '.join(rec.type_name for rec in r.seo.jsonld) or 'None'}")
        lines.append(f"Microdata: {', '.join(r.seo.microdata) or 'None'}")
        lines.append(f"RDFa:      {', '.join(r.seo.rdfa) or 'None'}")
        lines.append("")

        lines.append("== Selector Map ==")
        labels = {n.id: n.label for n in r.graph.nodes}
        if not r.graph.edges:
            lines.append("No mapped selectors.")
        for e in r.graph.edges:
            lines.append(f"{labels[e.source]} -> {labels[e.target]} [{'ok' if e.ok else 'BROKEN'}]")

        return "\n".join(lines)
