# tests/scanner/test_scan_controller.py
import json

import pytest

from scanner.controllers.scan_controller import run_all_checks
from scanner.model import ScanConfig


def test_empty_inputs_default_config(controller):
    """Scenario: lege markup, leeg script, standaardconfig."""
    report = controller.run_scan("", "")
    assert [(f.rule_id, f.severity) for f in report.findings] == [("seo-critical-missing", "error")] * 5 + [
        ("jsonld-missing", "warn")
    ]
    assert report.to_dict()["summary"] == {
        "totalSelectors": 0,
        "brokenReferences": 0,
        "seoCriticalMissing": 5,
        "hiddenAboveFold": 0,
    }
    assert report.graph.nodes == []
    assert report.graph.edges == []


def test_resolved_identifier(controller):
    """Scenario: getElementById('a') tegen <div id="a">."""
    report = controller.run_scan('<div id="a">', "getElementById('a')")
    assert not [f for f in report.findings if f.rule_id == "selector-mismatch"]
    assert [n.side for n in report.graph.nodes] == ["script", "markup"]
    assert report.graph.nodes[1].label == "#a"
    assert [e.ok for e in report.graph.edges] == [True]


def test_missing_identifier_via_query_selector(controller):
    """Scenario: querySelector('#missing') zonder bijbehorend element."""
    report = controller.run_scan("<div></div>", "document.querySelector('#missing')")
    mismatches = [f for f in report.findings if f.rule_id == "selector-mismatch"]
    assert len(mismatches) == 1
    assert mismatches[0].severity == "error"
    assert mismatches[0].target_name == "#missing"
    assert [e.ok for e in report.graph.edges] == [False]
    assert report.summary.broken_references == 1


def test_bem_scenario(controller):
    """Scenario: BEM aan, één foute en één goede class."""
    config = {"naming": {"enforceBEM": True}}
    bad = controller.run_scan('<p class="Product_Title"></p>', "", config)
    good = controller.run_scan('<p class="product__title--active"></p>', "", config)
    assert [f.target_name for f in bad.findings if f.rule_id == "naming-bem"] == [".Product_Title"]
    assert [f for f in good.findings if f.rule_id == "naming-bem"] == []


def test_duplicate_identifier_scenario(controller):
    """Scenario: twee elementen met id 'x'."""
    report = controller.run_scan('<div id="x"></div><span id="x"></span>', "")
    duplicates = [f for f in report.findings if f.rule_id == "duplicate-id"]
    assert len(duplicates) == 1
    assert duplicates[0].target_name == "#x"
    assert "2 occurrences" in duplicates[0].message
    # Distinct values, not occurrences
    assert report.summary.total_selectors == 1


@pytest.mark.parametrize("critical", [[], ["main"], ["title", "title", "p["]])
def test_critical_count_matches_config(controller, sample_markup, critical):
    """Test |seo.critical| == 5 + aantal geconfigureerde selectors."""
    report = controller.run_scan(sample_markup, "", {"seo": {"criticalSelectors": critical}})
    assert len(report.seo.critical) == 5 + len(critical)


def test_sample_page(controller, sample_markup, sample_script):
    """Test de volledige voorbeeldpagina met bijbehorend script."""
    report = controller.run_scan(sample_markup, sample_script, ScanConfig.coerce({"naming": {"enforceBEM": True}}))

    assert [(f.rule_id, f.target_name) for f in report.findings] == [("selector-mismatch", "#missingNode")]
    assert report.summary.model_dump() == {
        "total_selectors": 9,
        "broken_references": 1,
        "seo_critical_missing": 0,
        "hidden_above_fold": 0,
    }
    assert [r.type_name for r in report.seo.jsonld] == ["Product"]
    assert len(report.graph.nodes) == 8
    assert [e.ok for e in report.graph.edges] == [True, True, False, True]


def test_hidden_above_fold_only_feeds_summary(controller):
    """Test of verborgen above-the-fold elementen alleen de teller beïnvloeden."""
    report = controller.run_scan('<header style="display:none"><h1 hidden>x</h1></header>', "")
    assert report.summary.hidden_above_fold == 2
    assert len(report.hidden_snippets) == 2
    assert "hiddenSnippets" not in report.to_dict()
    assert {f.rule_id for f in report.findings} == {"seo-critical-missing", "jsonld-missing"}


def test_mismatch_findings_only_use_checked_prefixes(controller):
    """Test of selector-mismatch alleen sleutels met #, . of [data- noemt."""
    script = "$('ul li'); $('#a'); $('.b'); $('[data-c]'); $('[role=x]'); getElementById('d')"
    report = controller.run_scan("<p></p>", script)
    for f in report.findings:
        if f.rule_id == "selector-mismatch":
            assert f.target_name.startswith(("#", ".", "[data-"))


def test_scan_is_deterministic(controller, sample_markup, sample_script):
    """Test of dezelfde invoer byte-identieke uitvoer geeft."""
    config = {"naming": {"enforceBEM": True}, "seo": {"criticalSelectors": ["footer", "main"]}}
    first = controller.run_scan(sample_markup, sample_script, config).to_json()
    second = controller.run_scan(sample_markup, sample_script, config).to_json()
    assert first == second


def test_serialized_report_shape(sample_markup, sample_script):
    """Test de sleutels van het geserialiseerde rapport."""
    data = run_all_checks(sample_markup, sample_script)
    assert set(data) == {"findings", "summary", "seo", "graph"}
    assert set(data["seo"]) == {"critical", "jsonld", "microdata", "rdfa"}
    assert data["seo"]["jsonld"] == [{"typeName": "Product"}]
    assert data["findings"][0] == {
        "ruleId": "selector-mismatch",
        "severity": "error",
        "targetType": "css",
        "targetName": "#missingNode",
        "message": "Referenced in script but not found in markup: #missingNode",
        "snippet": "querySelector('#missingNode')",
    }
    assert data["graph"]["nodes"][0] == {"id": "script:0", "label": "#buyNowBtn", "side": "script"}
    # Must survive a JSON round trip
    assert json.loads(json.dumps(data)) == data


def test_garbage_input_never_raises(controller):
    """Test of willekeurige invoer altijd een volledig rapport oplevert."""
    report = controller.run_scan("<<<>>><div id=>\x00</", "$(((('\"`", {"seo": {"criticalSelectors": ["::bad"]}})
    assert len(report.seo.critical) == 6
    assert report.summary.seo_critical_missing == 6


def test_malformed_jsonld_still_reports_missing(controller):
    """Test of een pagina met alleen een kapot JSON-LD blok precies één jsonld-missing krijgt."""
    markup = '<head><script type="application/ld+json">{"@type": "Product",</script></head>'
    report = controller.run_scan(markup, "")
    missing = [f for f in report.findings if f.rule_id == "jsonld-missing"]
    assert len(missing) == 1
    assert missing[0].severity == "warn"
    assert report.seo.jsonld == []
