# src/selectorlens/core/handlers/scan_handler.py
import argparse
import copy
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from scanner.controllers.report_controller import ReportController, SEVERITIES
from scanner.controllers.scan_controller import ScanController
from scanner.model import ScanConfig
from selectorlens.core.managers.config_manager import config_manager, set_nested_value
from selectorlens.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

USAGE = """
  scan <markup-file> [<script-file>] [options]
                      Cross-references the markup against the script and checks SEO essentials.
                      Use '-' as one of the file names to read it from stdin.
                      --bem                 Enforce BEM class naming.
                      --critical SEL ...    Extra critical SEO selectors (after the built-ins).
                      --set KEY=VALUE       Override a 'scan.' setting for this run (e.g. naming.enforceBEM=true).
                      --format text|json    Output format (default: text).
                      --severity LEVEL      Only show findings of this severity.
                      --rule RULE_ID        Only show findings of this rule (repeatable).
                      --export PATH         Save the shown findings to .csv or .xlsx. Bare file names
                                            are saved to the Documents folder.
""".strip()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="selectorlens scan", description="Scan markup against script selectors.")
    parser.add_argument("markup", help="Markup file to scan ('-' for stdin).")
    parser.add_argument("script", nargs="?", default=None, help="Script file with selector usage.")
    parser.add_argument("--bem", action="store_true", help="Enforce BEM class naming.")
    parser.add_argument("--critical", nargs="+", default=[], metavar="SEL", help="Extra critical SEO selectors.")
    parser.add_argument("--set", action="append", default=[], dest="overrides", metavar="KEY=VALUE",
                        help="Override a 'scan.' setting for this run.")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")
    parser.add_argument("--severity", choices=list(SEVERITIES), default=None, help="Severity filter.")
    parser.add_argument("--rule", action="append", default=None, dest="rules", metavar="RULE_ID",
                        help="Rule filter (repeatable).")
    parser.add_argument("--export", default=None, metavar="PATH", help="Export findings to .csv or .xlsx.")
    return parser


def _read_source(path_str: Optional[str], stdin_text: Optional[str]) -> str:
    if path_str is None:
        return ""
    if path_str == "-":
        return stdin_text or ""
    return Path(path_str).read_text(encoding="utf-8")


def build_scan_config(overrides: List[str], enforce_bem: bool, extra_critical: List[str]) -> ScanConfig:
    """
    Builds the config snapshot for one run from the 'scan' settings plus CLI overrides.
    The loaded settings themselves are left untouched.

    Raises:
        ValueError: On a malformed or uncastable override.
        ValidationError: When the resulting settings do not form a valid ScanConfig.
    """
    scan_settings = copy.deepcopy(config_manager.get_nested("scan", {}))

    for override in overrides:
        key, sep, value = override.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid override '{override}', expected KEY=VALUE")
        if not set_nested_value(scan_settings, key.strip(), value.strip()):
            raise ValueError(f"Could not apply override '{override}'")

    config = ScanConfig.model_validate(scan_settings)
    if enforce_bem or extra_critical:
        config = config.model_copy(update={
            "naming": config.naming.model_copy(update={"enforce_bem": config.naming.enforce_bem or enforce_bem}),
            "seo": config.seo.model_copy(
                update={"critical_selectors": list(config.seo.critical_selectors) + list(extra_critical)}
            ),
        })
    return config


def handle_scan(args: List[str], stdin: Optional[str] = None) -> int:
    """
    Handler for the 'scan' command.

    Returns:
        int: 0 when no error finding is shown, 1 when at least one is, 2 on usage or input errors.
    """
    parser = _build_parser()
    try:
        opts = parser.parse_args(args)
    except SystemExit as e:
        # argparse exits on --help (0) and on bad arguments (2)
        return int(e.code or 0)

    if opts.markup == "-" and opts.script == "-":
        print("❌ Only one of markup and script can be read from stdin.")
        return 2

    try:
        markup = _read_source(opts.markup, stdin)
        script = _read_source(opts.script, stdin)
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ Could not read input: {e}")
        return 2

    try:
        config = build_scan_config(opts.overrides, opts.bem, opts.critical)
    except (ValueError, ValidationError) as e:
        print(f"❌ Invalid scan configuration: {e}")
        return 2

    report = ScanController().run_scan(markup, script, config)
    controller = ReportController(report)

    try:
        findings = controller.filter_findings(severity=opts.severity, rule_ids=opts.rules)
    except ValueError as e:
        print(f"❌ {e}")
        return 2

    if opts.format == "json":
        data = report.to_dict()
        data["findings"] = [f.model_dump(by_alias=True, exclude_none=True) for f in findings]
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        print(controller.render_text(findings))

    if opts.export:
        output_file = PathUtils.resolve_output_path(opts.export)
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            controller.export_findings(output_file, findings)
        except (OSError, ValueError) as e:
            logger.debug("Export failed", exc_info=True)
            print(f"❌ Export failed: {e}")
            return 2
        print(f"✅ Exported {len(findings)} findings to {output_file}")

    return 1 if any(f.severity == "error" for f in findings) else 0
