"""Render a view document tree into JSX markup.

The renderer walks the document depth-first and emits one line per tag or
text run, indented two spaces per level starting at four so the result slots
straight into a ``return (...)`` block. Component references are resolved
against the component table on the way down and asset properties against the
asset table; the imports those resolutions require are collected alongside
and returned separately from the body.

Example
-------
>>> from protojsx.proto import ComponentTable, AssetTable, Document, Element, Text
>>> tree = Document(body=Element("p", children=(Text("Hi"),)))
>>> print(render_view(tree, ComponentTable(), AssetTable()).code, end="")
    <p>
      Hi
    </p>
"""

from __future__ import annotations

import logging
import typing as typ

from protojsx._constants import BASE_INDENT, INDENT_STEP
from protojsx.proto.models import (
    AssetReference,
    BooleanLiteral,
    ComponentReference,
    Element,
    NumberLiteral,
    StringLiteral,
    Text,
    VariableReference,
)

from .models import RenderedView
from .resolver import ImportCollector, resolve_asset, resolve_component
from .syntax import attribute_string, escape_text, format_number, self_closes

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from protojsx.proto.models import (
        AssetTable,
        ComponentTable,
        Document,
        Node,
        Properties,
        PropertyValue,
    )

logger = logging.getLogger(__name__)


class ViewRenderer:
    """Render one document against shared, read-only definition tables."""

    def __init__(self, components: ComponentTable, assets: AssetTable) -> None:
        """Bind the renderer to the tables every reference resolves against.

        Parameters
        ----------
        components : ComponentTable
            Component presets; unknown references fail the render.
        assets : AssetTable
            Media assets; unknown or inconsistent assets fail the render.
        """
        self.components = components
        self.assets = assets

    def render(self, document: Document) -> RenderedView:
        """Render ``document`` and return its body with collected imports."""
        imports = ImportCollector()
        lines: list[str] = []
        self._render_node(document.body, BASE_INDENT, lines, imports)
        if not lines:
            # A body that renders nothing still needs an expression to return.
            lines.append(" " * BASE_INDENT + "null\n")
        logger.debug(
            "rendered view %s: %d lines, %d imports",
            document.name,
            len(lines),
            len(imports),
        )
        return RenderedView(code="".join(lines), imports=imports.directives())

    def _render_node(
        self, node: Node, indent: int, lines: list[str], imports: ImportCollector
    ) -> None:
        match node:
            case Text(content=content):
                pad = " " * indent
                lines.extend(
                    f"{pad}{escape_text(line.strip())}\n"
                    for line in content.splitlines()
                    if line.strip()
                )
            case Element():
                self._render_tag(
                    node.tag,
                    node.class_name,
                    node.properties,
                    node.children,
                    indent,
                    lines,
                    imports,
                )
            case ComponentReference():
                effective = resolve_component(node, self.components, imports)
                children = node.children
                if not children and effective.children_template is not None:
                    children = (effective.children_template,)
                self._render_tag(
                    effective.tag,
                    effective.class_name,
                    effective.properties,
                    children,
                    indent,
                    lines,
                    imports,
                )

    def _render_tag(
        self,
        tag: str,
        class_name: str | None,
        properties: Properties,
        children: cabc.Sequence[Node],
        indent: int,
        lines: list[str],
        imports: ImportCollector,
    ) -> None:
        pad = " " * indent
        attributes: list[str] = []
        if class_name and "className" not in properties:
            attributes.append(attribute_string("className", class_name))
        attributes.extend(
            self._render_attribute(name, value, imports)
            for name, value in properties.items()
        )
        opening = " ".join([tag, *attributes])

        if not children and self_closes(tag):
            lines.append(f"{pad}<{opening} />\n")
            return
        if not children:
            lines.append(f"{pad}<{opening}></{tag}>\n")
            return
        lines.append(f"{pad}<{opening}>\n")
        for child in children:
            self._render_node(child, indent + INDENT_STEP, lines, imports)
        lines.append(f"{pad}</{tag}>\n")

    def _render_attribute(
        self, name: str, value: PropertyValue, imports: ImportCollector
    ) -> str:
        match value:
            case StringLiteral(value=text):
                return attribute_string(name, text)
            case NumberLiteral(value=number):
                return f"{name}={{{format_number(number)}}}"
            case BooleanLiteral(value=flag):
                return name if flag else f"{name}={{false}}"
            case VariableReference(name=identifier):
                return f"{name}={{{identifier}}}"
            case AssetReference(name=asset_name):
                resolved = resolve_asset(asset_name, self.assets, imports)
                return f"{name}={{{resolved.expression}}}"


def render_view(
    document: Document, components: ComponentTable, assets: AssetTable
) -> RenderedView:
    """Render ``document`` against ``components`` and ``assets``.

    Returns
    -------
    RenderedView
        JSX body text plus import directives in first-seen order, each
        identifier appearing once.

    Raises
    ------
    UnknownComponentError
        If a component reference names an absent preset.
    UnknownAssetError
        If an asset property names an absent asset.
    InconsistentAssetDefinitionError
        If a referenced asset lacks the field its kind requires.
    """
    return ViewRenderer(components, assets).render(document)


__all__ = ["ViewRenderer", "render_view"]
