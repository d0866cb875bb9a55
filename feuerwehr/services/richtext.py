"""Lexical rich-text conversion.

The CMS stores rich text as Lexical editor state:

    {"root": {"type": "root", "children": [{"type": "paragraph", "children": [...]}]}}

`render_rich_text` is what pages use: structured HTML conversion, with plain
text extraction as the fallback when a tree cannot be converted.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from markupsafe import Markup, escape

logger = logging.getLogger("uvicorn.error")

# Lexical text format bitmask
FORMAT_BOLD = 1
FORMAT_ITALIC = 1 << 1
FORMAT_STRIKETHROUGH = 1 << 2
FORMAT_UNDERLINE = 1 << 3
FORMAT_CODE = 1 << 4
FORMAT_SUBSCRIPT = 1 << 5
FORMAT_SUPERSCRIPT = 1 << 6

# Innermost tag first.
_FORMAT_TAGS: tuple[tuple[int, str], ...] = (
    (FORMAT_CODE, "code"),
    (FORMAT_SUBSCRIPT, "sub"),
    (FORMAT_SUPERSCRIPT, "sup"),
    (FORMAT_STRIKETHROUGH, "s"),
    (FORMAT_UNDERLINE, "u"),
    (FORMAT_ITALIC, "em"),
    (FORMAT_BOLD, "strong"),
)

_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_ALIGNMENTS = {"left", "center", "right", "justify", "start", "end"}
_SAFE_URL = re.compile(r"^(https?:|mailto:|tel:|/|#)", re.IGNORECASE)


class RichTextConversionError(ValueError):
    """Raised when a Lexical tree cannot be converted to HTML."""


# ============================================================
# Plain text
# ============================================================


def extract_text(content: Any, separator: str = " ") -> str:
    """Concatenate all text in a Lexical document, depth-first.

    Never raises: anything that is not a node tree yields "".
    """
    if isinstance(content, dict) and "root" in content:
        return _extract(content["root"], separator)
    return _extract(content, separator)


def _extract(node: Any, separator: str) -> str:
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return ""
    if "text" in node:
        return str(node["text"])
    children = node.get("children")
    if isinstance(children, list):
        return separator.join(_extract(child, separator) for child in children)
    return ""


def truncate_words(text: str, max_words: int) -> str:
    """Keep the first `max_words` words, appending "..." when cut."""
    if not text:
        return ""
    words = text.split()
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + "..."


# ============================================================
# HTML
# ============================================================


def lexical_to_html(content: Any) -> str:
    """Convert a Lexical document to HTML.

    Raises:
        RichTextConversionError: malformed tree or unsupported leaf node.
    """
    if not content:
        return ""
    if not isinstance(content, dict):
        raise RichTextConversionError(f"Expected a Lexical document, got {type(content).__name__}")
    root = content.get("root", content)
    if not isinstance(root, dict):
        raise RichTextConversionError("Lexical root is not an object")
    return _render_children(root)


def _render_children(node: dict[str, Any]) -> str:
    children = node.get("children", [])
    if not isinstance(children, list):
        raise RichTextConversionError(f"Node {node.get('type')!r} has non-list children")
    return "".join(_render_node(child) for child in children)


def _style_attr(node: dict[str, Any]) -> str:
    align = node.get("format")
    if isinstance(align, str) and align in _ALIGNMENTS:
        return f' style="text-align: {align};"'
    return ""


def _render_text(node: dict[str, Any]) -> str:
    text = node.get("text", "")
    if not isinstance(text, str):
        raise RichTextConversionError("Text node without string text")
    html = str(escape(text))
    fmt = node.get("format", 0)
    if isinstance(fmt, int):
        for flag, tag in _FORMAT_TAGS:
            if fmt & flag:
                html = f"<{tag}>{html}</{tag}>"
    return html


def _render_link(node: dict[str, Any]) -> str:
    fields = node.get("fields") or {}
    url = fields.get("url") or node.get("url") or ""
    if fields.get("linkType") == "internal":
        doc = fields.get("doc") or {}
        value = doc.get("value") if isinstance(doc, dict) else None
        if isinstance(value, dict) and value.get("slug"):
            url = f"/pages/{value['slug']}"
    if not isinstance(url, str) or not _SAFE_URL.match(url):
        url = "#"
    new_tab = bool(fields.get("newTab") or node.get("target") == "_blank")
    target = ' target="_blank" rel="noopener noreferrer"' if new_tab else ""
    return f'<a href="{escape(url)}"{target}>{_render_children(node)}</a>'


def _render_upload(node: dict[str, Any]) -> str:
    value = node.get("value")
    if not isinstance(value, dict):
        # Unpopulated relation (just an id) - nothing to show.
        return ""
    url = value.get("url") or (f"/media/{value['filename']}" if value.get("filename") else "")
    if not url:
        return ""
    mime = str(value.get("mimeType") or value.get("mime_type") or "")
    alt = escape(value.get("alt") or "")
    if mime.startswith("video/"):
        return f'<video controls src="{escape(url)}"></video>'
    if mime.startswith("audio/"):
        return f'<audio controls src="{escape(url)}"></audio>'
    return f'<img src="{escape(url)}" alt="{alt}" loading="lazy" />'


def _render_node(node: Any) -> str:
    if not isinstance(node, dict):
        raise RichTextConversionError(f"Unexpected node of type {type(node).__name__}")

    node_type = node.get("type")
    if node_type == "text":
        return _render_text(node)
    if node_type == "linebreak":
        return "<br />"
    if node_type == "tab":
        return "\t"
    if node_type == "horizontalrule":
        return "<hr />"
    if node_type == "paragraph":
        return f"<p{_style_attr(node)}>{_render_children(node)}</p>"
    if node_type == "heading":
        tag = node.get("tag", "h2")
        if tag not in _HEADING_TAGS:
            raise RichTextConversionError(f"Invalid heading tag {tag!r}")
        return f"<{tag}{_style_attr(node)}>{_render_children(node)}</{tag}>"
    if node_type == "quote":
        return f"<blockquote>{_render_children(node)}</blockquote>"
    if node_type == "list":
        tag = "ol" if node.get("listType") == "number" or node.get("tag") == "ol" else "ul"
        css = ' class="list-check"' if node.get("listType") == "check" else ""
        return f"<{tag}{css}>{_render_children(node)}</{tag}>"
    if node_type == "listitem":
        checked = node.get("checked")
        if checked is None:
            return f"<li>{_render_children(node)}</li>"
        state = "true" if checked else "false"
        return f'<li role="checkbox" aria-checked="{state}">{_render_children(node)}</li>'
    if node_type in ("link", "autolink"):
        return _render_link(node)
    if node_type == "upload":
        return _render_upload(node)
    if node_type == "root":
        return _render_children(node)
    if isinstance(node.get("children"), list):
        # Unknown container (e.g. a custom block): keep its content.
        return _render_children(node)
    raise RichTextConversionError(f"Unsupported node type {node_type!r}")


def render_rich_text(content: Any) -> Markup:
    """HTML for a Lexical document, falling back to escaped plain text."""
    try:
        return Markup(lexical_to_html(content))
    except Exception as e:
        logger.warning("[richtext] HTML conversion failed, using text fallback: %s", e)
        text = extract_text(content, separator="")
        if not text.strip():
            return Markup("")
        paragraphs = [p for p in text.split("\n\n") if p.strip()]
        return Markup("").join(Markup("<p>{}</p>").format(p) for p in paragraphs)


def text_to_lexical(text: str) -> dict[str, Any]:
    """Build a minimal Lexical document, one paragraph per blank-line block."""
    paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
    return {
        "root": {
            "type": "root",
            "version": 1,
            "direction": "ltr",
            "format": "",
            "indent": 0,
            "children": [
                {
                    "type": "paragraph",
                    "version": 1,
                    "format": "",
                    "indent": 0,
                    "children": [{"type": "text", "version": 1, "text": p, "format": 0}],
                }
                for p in paragraphs
            ],
        }
    }
