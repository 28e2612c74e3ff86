"""Render DatoCMS structured text ("dast") documents to HTML."""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import urlparse

from markupsafe import Markup, escape

# Empty scheme covers relative links and fragments.
SAFE_LINK_SCHEMES = {"", "http", "https", "mailto"}

MARK_TAGS: Dict[str, str] = {
    "strong": "strong",
    "emphasis": "em",
    "underline": "u",
    "strikethrough": "s",
    "code": "code",
    "highlight": "mark",
}


def _children(node: Dict[str, Any]) -> str:
    return "".join(_render_node(child) for child in node.get("children") or [])


def _render_span(node: Dict[str, Any]) -> str:
    text = str(escape(node.get("value") or "")).replace("\n", "<br>")
    for mark in node.get("marks") or []:
        tag = MARK_TAGS.get(mark)
        if tag:
            text = f"<{tag}>{text}</{tag}>"
    return text


def _render_node(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    kind = node.get("type")
    if kind == "span":
        return _render_span(node)
    if kind == "paragraph":
        return f"<p>{_children(node)}</p>"
    if kind == "heading":
        level = node.get("level", 2)
        if level not in range(1, 7):
            level = 2
        return f"<h{level}>{_children(node)}</h{level}>"
    if kind == "list":
        tag = "ol" if node.get("style") == "numbered" else "ul"
        return f"<{tag}>{_children(node)}</{tag}>"
    if kind == "listItem":
        return f"<li>{_children(node)}</li>"
    if kind == "blockquote":
        attribution = node.get("attribution")
        footer = f"<footer>{escape(attribution)}</footer>" if attribution else ""
        return f"<blockquote>{_children(node)}{footer}</blockquote>"
    if kind == "code":
        language = node.get("language")
        cls = f' class="language-{escape(language)}"' if language else ""
        return f"<pre><code{cls}>{escape(node.get('code') or '')}</code></pre>"
    if kind == "thematicBreak":
        return "<hr>"
    if kind == "link":
        url = str(node.get("url") or "").strip()
        if urlparse(url).scheme.lower() not in SAFE_LINK_SCHEMES:
            return _children(node)
        return f'<a href="{escape(url)}">{_children(node)}</a>'
    if kind == "root":
        return _children(node)
    # Record references (block, itemLink, inlineItem) need the linked records,
    # which the page queries do not request. Keep any inline text.
    return _children(node)


def _document(content: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Accept the GraphQL `{value: {schema, document}}` wrapper or the value itself."""
    if not isinstance(content, dict):
        return None
    value = content.get("value", content)
    if not isinstance(value, dict):
        return None
    document = value.get("document")
    return document if isinstance(document, dict) else None


def render_structured_text(content: Optional[Dict[str, Any]]) -> Markup:
    """Return safe HTML for a structured text field; empty markup if absent."""
    document = _document(content)
    if document is None:
        return Markup("")
    return Markup(_render_node(document))
