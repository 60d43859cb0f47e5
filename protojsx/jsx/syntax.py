"""JSX lexical helpers: literals, text escaping, and tag classification."""

from __future__ import annotations

import math
import re
from html import escape

from protojsx._constants import JS_IDENTIFIER, VOID_TAGS

_BRACE_PATTERN = re.compile(r"[{}]")
_ATTRIBUTE_UNSAFE = re.compile(r'["&\n\r]')
_JS_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def js_string(value: str, quote: str = '"') -> str:
    """Return ``value`` as a JavaScript string literal delimited by ``quote``."""
    escaped = "".join(_JS_ESCAPES.get(char, char) for char in value)
    escaped = escaped.replace(quote, "\\" + quote)
    return f"{quote}{escaped}{quote}"


def format_number(value: float) -> str:
    """Return the shortest JavaScript literal that round-trips ``value``.

    >>> format_number(3.0)
    '3'
    >>> format_number(0.1)
    '0.1'
    >>> format_number(float("-inf"))
    '-Infinity'
    >>> format_number(-0.0)
    '-0'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0 and math.copysign(1.0, value) < 0:
        return "-0"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def attribute_string(name: str, value: str) -> str:
    """Return a string attribute, bracing it when JSX quoting cannot hold it."""
    if _ATTRIBUTE_UNSAFE.search(value):
        return f"{name}={{{js_string(value)}}}"
    return f'{name}="{value}"'


def escape_text(text: str) -> str:
    """Escape ``text`` for a JSX child position."""
    escaped = escape(text, quote=False)
    return _BRACE_PATTERN.sub(lambda match: f'{{"{match.group(0)}"}}', escaped)


def is_js_identifier(name: str) -> bool:
    """Return whether ``name`` can be used as a JavaScript binding."""
    return JS_IDENTIFIER.fullmatch(name) is not None


def is_component_tag(tag: str) -> bool:
    """Return whether ``tag`` names a React component rather than an HTML element."""
    return tag[:1].isupper() or "." in tag


def self_closes(tag: str) -> bool:
    """Return whether an element without children is written as ``<tag />``."""
    return tag in VOID_TAGS or is_component_tag(tag)


__all__ = [
    "attribute_string",
    "escape_text",
    "format_number",
    "is_component_tag",
    "is_js_identifier",
    "js_string",
    "self_closes",
]
