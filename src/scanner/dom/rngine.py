# src/scanner/dom/rngine.py
import logging
from typing import List

from .core import RuleContext
from .models import Finding
from .registry import RuleRegistry

logger = logging.getLogger(__name__)


class RNGINE:
    """
    Rule Engine (RNGINE) for cross-referencing markup and script.

    It evaluates every registered rule against a RuleContext in the fixed
    registry order. The hidden above-the-fold heuristic is deliberately not a
    rule: it only feeds the summary counters.
    """

    def __init__(self):
        """Initializes the engine by discovering and loading all available rules."""
        RuleRegistry.discover()
        self.rules = RuleRegistry.get_all_rules()

    def run_rules(self, ctx: RuleContext) -> List[Finding]:
        """
        Runs the full rule suite.

        Args:
            ctx (RuleContext): Index, references, SEO report and config of one scan.

        Returns:
            List[Finding]: Findings grouped by rule, in rule order.
        """
        findings: List[Finding] = []

        for rule in self.rules:
            if not rule.is_enabled(ctx.config):
                logger.debug("Rule %s disabled by configuration", rule.rule_id)
                continue

            results = rule.check(ctx)
            if results:
                findings.extend(results)

        return findings
