from typing import List

from ..core import RuleContext, RuleDefinition, rule_spec
from ..models import Finding

RULE_ID = "duplicate-id"


@rule_spec(rule_id=RULE_ID, severity="error")
def check_duplicate_ids(ctx: RuleContext) -> List[Finding]:
    """Reports every id used by more than one element, in order of first appearance."""
    res = []
    for element_id, count in ctx.index.identifier_occurrences.items():
        if count > 1:
            res.append(Finding(
                rule_id=RULE_ID,
                severity="error",
                target_type="id",
                target_name=element_id,
                message=f"Duplicate id detected: {element_id} ({count} occurrences)",
            ))
    return res


DEFINITION = RuleDefinition(order=40, check=check_duplicate_ids)
