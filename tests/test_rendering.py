import json

import pytest

from grammar_overlay.config import GrammarOverlayConfig
from grammar_overlay.models import RenderSegment
from grammar_overlay.rendering import (
    get_renderer,
    render_ansi,
    render_brackets,
    render_html,
    render_json,
)

SEGMENTS = [
    RenderSegment.plain("I "),
    RenderSegment.highlighted("has"),
    RenderSegment.plain(" a <apple>"),
]


def test_render_html_escapes_text_and_wraps_highlights():
    html = render_html(SEGMENTS, css_class="hl")
    assert html == 'I <span class="hl">has</span> a &lt;apple&gt;'


def test_render_html_escapes_highlighted_markup():
    html = render_html([RenderSegment.highlighted("<script>")], css_class="hl")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_brackets_marks_highlights():
    assert render_brackets(SEGMENTS) == "I [has] a <apple>"
    assert render_brackets(SEGMENTS, "**", "**") == "I **has** a <apple>"


def test_render_ansi_styles_only_highlights():
    output = render_ansi(SEGMENTS)
    assert output.startswith("I ")
    assert "\x1b[" in output
    assert output.endswith(" a <apple>")


def test_render_json_lists_segments():
    payload = json.loads(render_json(SEGMENTS))
    assert payload[1] == {"kind": "highlighted", "text": "has"}
    assert [item["kind"] for item in payload] == ["plain", "highlighted", "plain"]


def test_get_renderer_uses_configured_class():
    config = GrammarOverlayConfig(highlight_class="error")
    renderer = get_renderer("HTML", config)
    assert '<span class="error">has</span>' in renderer(SEGMENTS)


def test_get_renderer_rejects_unknown_format():
    with pytest.raises(ValueError):
        get_renderer("pdf")
