# src/scanner/dom/registry.py
import importlib
import pkgutil
import logging
from typing import List

from .core import RuleDefinition

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Central registry for scan rules.

    Dynamically discovers RuleDefinition modules from the 'scanner.dom.rules'
    package and keeps them sorted by their declared order, which is the order
    findings are reported in.
    """

    _definitions: List[RuleDefinition] = []
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all rule definitions found in the 'scanner.dom.rules' package.

        Every module exposing a `DEFINITION` attribute (instance of `RuleDefinition`)
        is registered. Loading happens once; later calls are no-ops.
        """
        if cls._loaded:
            return

        definitions: List[RuleDefinition] = []
        try:
            import scanner.dom.rules as rules_pkg

            for _, name, _ in pkgutil.iter_modules(rules_pkg.__path__):
                full_name = f"scanner.dom.rules.{name}"
                try:
                    module = importlib.import_module(full_name)
                    if hasattr(module, "DEFINITION") and isinstance(module.DEFINITION, RuleDefinition):
                        definitions.append(module.DEFINITION)
                        logger.debug(f"Rule loaded: {module.DEFINITION.rule_id}")
                except Exception as e:
                    logger.error(f"Error loading rule module {name}: {e}")

        except ImportError as e:
            logger.error(f"Could not find rules package: {e}")
            return

        # Ties are impossible in practice, the rule id keeps the sort total anyway
        cls._definitions = sorted(definitions, key=lambda d: (d.order, d.rule_id))
        cls._loaded = True

    @classmethod
    def get_all_rules(cls) -> List[RuleDefinition]:
        """Returns all registered rule definitions in evaluation order."""
        return list(cls._definitions)

    @classmethod
    def get_all_rule_ids(cls) -> List[str]:
        """
        Returns the rule ids of all registered rules in evaluation order.
        Used by the ReportController to validate rule filters.
        """
        return [d.rule_id for d in cls._definitions]
