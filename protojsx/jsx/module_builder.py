"""Assemble a rendered view into a complete React component module.

The rendered JSX body and its import directives are placed into the
``view_module.jsx.jinja`` template, which adds the React import, the optional
MobX ``observer`` wrapper, the document's hand-declared imports, and the
default export.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from protojsx.proto.models import ImportConflictError, MalformedInputError

from .models import ImportDirective, ImportOrigin
from .syntax import is_js_identifier

if typ.TYPE_CHECKING:
    from protojsx.proto.models import Document

    from .models import RenderedView

# Bindings the template introduces, keyed to the module they come from.
_MODULE_BINDINGS = {"React": "react", "observer": "mobx-react"}


class ViewModuleBuilder:
    """Render the component module wrapping a view body."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``view_module.jsx.jinja``. Defaults to
            ``protojsx/templates``.
        """
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("view_module.jsx.jinja")

    def build(
        self, document: Document, rendered: RenderedView, *, name: str | None = None
    ) -> str:
        """Return module source for ``rendered``.

        ``name`` overrides the document's own component name; one of the two
        must be set.

        Raises
        ------
        MalformedInputError
            If the component name is missing, is not a JavaScript identifier,
            or is already bound by an import or by the template itself.
        ImportConflictError
            If an import would rebind ``React`` (or ``observer`` when the
            document is wrapped in it).
        """
        component_name = name or document.name
        if not component_name:
            msg = "view document has no component name"
            raise MalformedInputError(msg, path="name")
        if not is_js_identifier(component_name):
            msg = f"component name '{component_name}' is not a JavaScript identifier"
            raise MalformedInputError(msg, path="name")

        bindings = dict(_MODULE_BINDINGS)
        if not document.observer:
            del bindings["observer"]
        directives = list(rendered.imports)
        collected = {directive.identifier for directive in directives}
        for manual in document.imports:
            if manual.name in collected:
                continue
            collected.add(manual.name)
            directives.append(
                ImportDirective(
                    identifier=manual.name,
                    source=manual.path,
                    origin=ImportOrigin.COMPONENT,
                )
            )
        for directive in directives:
            if directive.identifier in bindings:
                raise ImportConflictError(
                    directive.identifier,
                    bindings[directive.identifier],
                    directive.source,
                )
        if component_name in bindings or component_name in collected:
            msg = f"component name '{component_name}' is already bound by an import"
            raise MalformedInputError(msg, path="name")

        source = self.template.render(
            name=component_name,
            observer=document.observer,
            imports=[directive.statement for directive in directives],
            body=rendered.code,
        )
        if not source.endswith("\n"):
            source += "\n"
        return source


def build_view_module(
    document: Document, rendered: RenderedView, *, name: str | None = None
) -> str:
    """Return module source for ``rendered`` using the packaged template."""
    return ViewModuleBuilder().build(document, rendered, name=name)


__all__ = ["ViewModuleBuilder", "build_view_module"]
