from typing import List

from ..core import RuleContext, RuleDefinition, rule_spec
from ..models import Finding

RULE_ID = "jsonld-missing"


@rule_spec(rule_id=RULE_ID, severity="warn")
def check_jsonld_present(ctx: RuleContext) -> List[Finding]:
    """
    Rule: the page should carry at least one JSON-LD record.
    Microdata or RDFa on the page do not satisfy this rule.
    """
    if ctx.seo.jsonld:
        return []
    return [Finding(
        rule_id=RULE_ID,
        severity="warn",
        target_type="seo",
        message="No JSON-LD structured data detected.",
    )]


DEFINITION = RuleDefinition(order=30, check=check_jsonld_present)
