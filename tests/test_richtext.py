"""Tests for Lexical rich-text conversion."""

from markupsafe import Markup

from feuerwehr.services.richtext import (
    extract_text,
    lexical_to_html,
    render_rich_text,
    text_to_lexical,
    truncate_words,
)


def _doc(*children):
    return {"root": {"type": "root", "children": list(children)}}


def _paragraph(*children):
    return {"type": "paragraph", "children": list(children)}


def _text(text, fmt=0):
    return {"type": "text", "text": text, "format": fmt}


def test_extract_text_depth_first():
    doc = _doc(_paragraph(_text("Brand"), _text("in")), _paragraph(_text("Droß")))
    assert extract_text(doc) == "Brand in Droß"


def test_extract_text_never_raises():
    assert extract_text(None) == ""
    assert extract_text(42) == ""
    assert extract_text({"root": "broken"}) == "broken"


def test_truncate_words():
    assert truncate_words("eins zwei drei", 5) == "eins zwei drei"
    assert truncate_words("eins zwei drei", 2) == "eins zwei..."
    assert truncate_words("", 3) == ""


def test_html_paragraph_and_formats():
    doc = _doc(_paragraph(_text("fett", 1), _text(" und "), _text("kursiv", 2)))
    assert lexical_to_html(doc) == "<p><strong>fett</strong> und <em>kursiv</em></p>"


def test_html_escapes_text():
    doc = _doc(_paragraph(_text("<script>alert(1)</script>")))
    assert "<script>" not in lexical_to_html(doc)


def test_html_heading_list_and_link():
    doc = _doc(
        {"type": "heading", "tag": "h3", "children": [_text("Titel")]},
        {
            "type": "list",
            "listType": "number",
            "children": [{"type": "listitem", "children": [_text("eins")]}],
        },
        _paragraph(
            {
                "type": "link",
                "fields": {"url": "https://ff-dross.at", "newTab": True},
                "children": [_text("Link")],
            }
        ),
    )
    html = lexical_to_html(doc)
    assert "<h3>Titel</h3>" in html
    assert "<ol><li>eins</li></ol>" in html
    assert '<a href="https://ff-dross.at" target="_blank" rel="noopener noreferrer">Link</a>' in html


def test_html_rejects_unsafe_link():
    doc = _doc(_paragraph({"type": "link", "fields": {"url": "javascript:alert(1)"}, "children": [_text("x")]}))
    assert 'href="#"' in lexical_to_html(doc)


def test_render_falls_back_to_text():
    doc = _doc(_paragraph(_text("Hallo")), {"type": "mystery"})
    html = render_rich_text(doc)
    assert isinstance(html, Markup)
    assert html == Markup("<p>Hallo</p>")


def test_render_empty():
    assert render_rich_text(None) == Markup("")


def test_text_to_lexical_paragraphs():
    doc = text_to_lexical("Erster Absatz\n\nZweiter Absatz")
    assert len(doc["root"]["children"]) == 2
    assert extract_text(doc) == "Erster Absatz Zweiter Absatz"


def test_render_fallback_logs_reason(caplog):
    doc = _doc(_paragraph(_text("Hallo")), {"type": "mystery"})
    with caplog.at_level("WARNING", logger="uvicorn.error"):
        render_rich_text(doc)
    record = next(r for r in caplog.records if "[richtext]" in r.getMessage())
    assert record.args
    assert "text fallback" in record.getMessage()
