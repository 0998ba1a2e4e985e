from typing import List

from ..core import RuleContext, RuleDefinition, rule_spec
from ..models import Finding

RULE_ID = "seo-critical-missing"


@rule_spec(rule_id=RULE_ID, severity="error")
def check_critical_elements(ctx: RuleContext) -> List[Finding]:
    """One finding per critical element check that came back missing."""
    return [
        Finding(
            rule_id=RULE_ID,
            severity="error",
            target_type="seo",
            target_name=check.selector,
            message=f"Missing critical SEO element: {check.label} ({check.selector})",
        )
        for check in ctx.seo.critical
        if not check.present
    ]


DEFINITION = RuleDefinition(order=20, check=check_critical_elements)
