from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Finding, MarkupIndex, SeoReport, Severity
from scanner.model import ScanConfig
from scanner.script.extractor import SelectorReference


def rule_spec(rule_id: str, severity: Severity):
    """
    Decorator to declare which rule id and severity a rule function emits.
    Read by RuleDefinition so the RuleRegistry can list every known rule.
    """
    def decorator(func):
        func.rule_id = rule_id
        func.severity = severity
        return func
    return decorator


class RuleContext(BaseModel):
    """
    Everything a rule may look at. Built once per scan and never mutated by rules.
    """
    model_config = ConfigDict(frozen=True)

    index: MarkupIndex
    references: List[SelectorReference] = Field(default_factory=list)
    seo: SeoReport = Field(default_factory=SeoReport)
    config: ScanConfig = Field(default_factory=ScanConfig)


RuleCheck = Callable[[RuleContext], List[Finding]]


class RuleDefinition:
    """
    Configuration object binding a rule function to its evaluation order
    and an optional configuration gate.
    """

    def __init__(
            self,
            order: int,
            check: RuleCheck,
            enabled: Optional[Callable[[ScanConfig], bool]] = None
    ):
        self.order = order
        self.check = check
        self.enabled = enabled

        # --- Auto-Discovery of rule metadata ---
        self.rule_id: str = getattr(check, 'rule_id', check.__name__)
        self.severity: str = getattr(check, 'severity', 'info')

    def is_enabled(self, config: ScanConfig) -> bool:
        return self.enabled is None or bool(self.enabled(config))
