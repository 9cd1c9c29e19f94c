"""
Unit tests for RecordRenderer.

This suite verifies:
- Deterministic card and detail output
- Property rows use the display-value rule
- Optional sections are omitted entirely when absent or empty
- References keep source order; free text is escaped except for emphasis
"""

import re

import pytest

from conftest import SAMPLE_EPOXY, SAMPLE_IM7, SAMPLE_T300
from compositelab.parsers import RecordParser
from compositelab.schema import Category, ViewerConfig
from compositelab.viz import RecordRenderer


@pytest.fixture
def renderer():
    return RecordRenderer()


@pytest.fixture
def parse():
    return RecordParser().parse


def property_rows(html: str) -> list[tuple[str, str]]:
    """Extract (label, value) pairs from rendered property tables."""
    pattern = r'<span class="(?:prop|property)-label">(.*?)</span>\s*<span class="(?:prop|property)-value">(.*?)</span>'
    return re.findall(pattern, html)


def test_t300_card_and_detail(renderer, parse):
    record = parse(SAMPLE_T300)

    for html in (renderer.render_card(record), renderer.render_detail(record)):
        assert ("Tensile Modulus", "230 GPa") in property_rows(html)
        assert "T300 Carbon Fiber" in html


@pytest.mark.parametrize("document", [SAMPLE_T300, SAMPLE_IM7, SAMPLE_EPOXY])
def test_rendering_is_deterministic(renderer, parse, document):
    assert renderer.render_card(parse(document)) == renderer.render_card(parse(document))
    assert renderer.render_detail(parse(document)) == RecordRenderer().render_detail(parse(document))


def test_display_values(renderer, parse):
    rows = property_rows(renderer.render_detail(parse(SAMPLE_IM7)))

    assert ("Tensile Modulus", "276 GPa") in rows
    assert ("Density", "1.78 g/cm³ (typ.)") in rows


def test_empty_references_section_omitted(renderer, parse):
    html = renderer.render_detail(parse(SAMPLE_EPOXY))
    assert "references-section" not in html


def test_references_in_source_order(renderer, parse):
    record = parse({**SAMPLE_T300, "references": ["A", "B"]})
    html = renderer.render_detail(record)

    assert re.findall(r"<li>(.*?)</li>", html) == ["A", "B"]


def test_optional_groups_omitted(renderer, parse):
    html = renderer.render_detail(parse(SAMPLE_T300))

    assert "processing-section" not in html
    assert "rheological-section" not in html
    assert "notes-section" not in html
    assert "detailed-description-section" not in html
    # required groups render even when the record lacks them
    assert 'id="cure-kinetics-properties"' in html


def test_optional_groups_rendered(renderer, parse):
    html = renderer.render_detail(parse(SAMPLE_EPOXY))

    assert ("Cure Temperature", "177 °C") in property_rows(html)
    assert ("Minimum Viscosity", "0.5 Pa·s") in property_rows(html)
    assert "Store below -18 °C." in html


def test_card_rheological_only_when_present(renderer, parse):
    assert "Rheological Properties" not in renderer.render_card(parse(SAMPLE_T300))
    assert "Rheological Properties" in renderer.render_card(parse(SAMPLE_EPOXY))


def test_long_description(renderer, parse):
    html = renderer.render_detail(parse(SAMPLE_IM7))

    assert "<p>IM7 is a <strong>continuous</strong> fiber.</p>" in html
    assert "<p>Used in &lt;aerospace&gt; primary structures.</p>" in html


def test_free_text_is_escaped(renderer, parse):
    record = parse({**SAMPLE_T300, "name": "<img src=x onerror=alert(1)>", "references": ["<script>x</script>"]})
    html = renderer.render_detail(record) + renderer.render_card(record)

    assert "<img" not in html
    assert "<script>" not in html


def test_code_template_verbatim(renderer, parse):
    record = parse({**SAMPLE_T300, "abaqus": {"template": "*MATERIAL, NAME=T300\n*DENSITY\n1.76e-09,"}})

    assert "*MATERIAL, NAME=T300\n*DENSITY\n1.76e-09," in renderer.render_detail(record)
    assert 'id="abaqus-T300"' in renderer.render_card(record)


def test_detail_defaults(renderer, parse):
    html = renderer.render_detail(parse(SAMPLE_T300))

    assert '<span id="manufacturer">Various</span>' in html
    assert "No description available." in html
    assert renderer.page_title(parse(SAMPLE_T300)) == "T300 Carbon Fiber - CompositeLab"
    assert renderer.breadcrumb(parse(SAMPLE_T300)) == "Fiber Materials"


def test_card_links_to_detail_page(parse):
    renderer = RecordRenderer(ViewerConfig(detail_page="detail.html"))
    html = renderer.render_card(parse({**SAMPLE_EPOXY, "references": None}))

    assert 'data-href="detail.html?id=3501-6"' in html


def test_add_new_card(renderer):
    html = renderer.render_add_new(Category.MATRIX)

    assert "add-material-card" in html
    assert "Add New Matrix Material" in html


def test_placeholder_escapes_message(renderer):
    html = renderer.render_placeholder("Material Not Found", "No <b>such</b> material.", state="record_not_found")

    assert "<h1>Material Not Found</h1>" in html
    assert "No &lt;b&gt;such&lt;/b&gt; material." in html
    assert 'data-state="record_not_found"' in html
