# tests/scanner/test_extractor.py
from scanner.script.extractor import extract_selectors_from_script


def test_extract_get_element_by_id():
    """Test een enkele getElementById-aanroep."""
    refs = extract_selectors_from_script("document.getElementById('a')")
    assert len(refs) == 1
    assert refs[0].kind == "id"
    assert refs[0].raw_text == "a"
    assert refs[0].key == "#a"
    assert refs[0].matched_snippet == "getElementById('a')"
    assert refs[0].ordinal_index == 0


def test_extract_query_selector_verbatim():
    """Test of complexe selectors letterlijk worden overgenomen."""
    refs = extract_selectors_from_script('el.querySelectorAll("#list > li.item:not(.done)")')
    assert [r.raw_text for r in refs] == ["#list > li.item:not(.done)"]
    assert refs[0].kind == "css"


def test_extract_shorthand_and_backticks():
    """Test $()-aanroepen en backtick-literals."""
    refs = extract_selectors_from_script("$('.menu'); document.getElementById(`hero`);")
    assert [(r.kind, r.raw_text) for r in refs] == [("id", "hero"), ("css", ".menu")]


def test_matchers_are_grouped_in_fixed_order():
    """Test de volgorde: eerst id-lookups, dan querySelector, dan $()."""
    script = "$('.a');\ndocument.querySelector('#c');\ndocument.getElementById('b');\n$('#d');"
    refs = extract_selectors_from_script(script)
    assert [r.key for r in refs] == ["#b", "#c", ".a", "#d"]
    assert [r.ordinal_index for r in refs] == [0, 1, 2, 3]


def test_repeated_references_are_not_deduplicated():
    """Test of identieke verwijzingen elk apart worden geteld."""
    refs = extract_selectors_from_script("$('.x'); $('.x');")
    assert len(refs) == 2


def test_matches_inside_comments_are_kept():
    """Test de bekende beperking: ook commentaar wordt gematcht."""
    refs = extract_selectors_from_script("// document.querySelector('.old')")
    assert [r.raw_text for r in refs] == [".old"]


def test_multiline_query_selector():
    """Test een querySelector-aanroep verspreid over meerdere regels."""
    refs = extract_selectors_from_script("document.querySelector(\n  '.card'\n)")
    assert [r.raw_text for r in refs] == [".card"]


def test_empty_script():
    """Test of lege invoer geen verwijzingen oplevert."""
    assert extract_selectors_from_script("") == []
    assert extract_selectors_from_script(None) == []
