from typing import List

from ..core import RuleContext, RuleDefinition, rule_spec
from ..models import Finding

RULE_ID = "selector-mismatch"


@rule_spec(rule_id=RULE_ID, severity="error")
def check_selector_mismatch(ctx: RuleContext) -> List[Finding]:
    """
    Rule: every id/class/data-attribute selector used by the script must exist in the markup.
    Keys with any other prefix (tag names, combinators first, ...) are never checked.
    """
    res = []
    for ref in ctx.references:
        key = ref.key
        if ctx.index.lookup(key) is False:
            res.append(Finding(
                rule_id=RULE_ID,
                severity="error",
                target_type="css",
                target_name=key,
                message=f"Referenced in script but not found in markup: {key}",
                snippet=ref.matched_snippet,
            ))
    return res


# --- RULE DEFINITION ---
DEFINITION = RuleDefinition(order=10, check=check_selector_mismatch)
