import re
from typing import List

from ..core import RuleContext, RuleDefinition, rule_spec
from ..models import Finding

RULE_ID = "naming-bem"

# block[__element][--modifier], lowercase alphanumeric segments with single inner hyphens
_SEGMENT = r"[a-z0-9]+(?:-[a-z0-9]+)*"
BEM_RE = re.compile(rf"^{_SEGMENT}(?:__{_SEGMENT})?(?:--{_SEGMENT})?$")


def is_bem(class_name: str) -> bool:
    return BEM_RE.match(class_name) is not None


@rule_spec(rule_id=RULE_ID, severity="info")
def check_bem_naming(ctx: RuleContext) -> List[Finding]:
    res = []
    for token in ctx.index.class_tokens:
        # Tokens are stored as '.name'
        if not is_bem(token[1:]):
            res.append(Finding(
                rule_id=RULE_ID,
                severity="info",
                target_type="class",
                target_name=token,
                message=f"Class doesn't match BEM pattern: {token}",
            ))
    return res


# Only runs when naming.enforceBEM is switched on
DEFINITION = RuleDefinition(
    order=50,
    check=check_bem_naming,
    enabled=lambda config: config.naming.enforce_bem
)
