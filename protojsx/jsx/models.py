"""Shared dataclasses used by the JSX rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from .syntax import js_string

_QUOTE = "'"

if typ.TYPE_CHECKING:
    from protojsx.proto.models import Node, Properties


class ImportOrigin(enum.Enum):
    """Why an import directive was recorded."""

    ASSET = "asset"
    COMPONENT = "component"


@dc.dataclass(frozen=True, slots=True)
class ImportDirective:
    """A default import the caller prepends to the rendered body.

    Attributes
    ----------
    identifier : str
        Local binding introduced by the import.
    source : str
        Module specifier the binding is imported from.
    origin : ImportOrigin
        Whether an asset or a component definition required the import.
    """

    identifier: str
    source: str
    origin: ImportOrigin = ImportOrigin.ASSET

    @property
    def statement(self) -> str:
        """Return the JavaScript import statement for this directive."""
        return f"import {self.identifier} from {js_string(self.source, _QUOTE)};"


@dc.dataclass(frozen=True, slots=True)
class EffectiveTag:
    """Concrete tag, class, and merged properties of a resolved component."""

    tag: str
    class_name: str | None
    properties: Properties
    children_template: Node | None = None


@dc.dataclass(frozen=True, slots=True)
class ResolvedAsset:
    """Expression emitted for an asset and the import it needs, if any.

    Attributes
    ----------
    expression : str
        Embedded-expression body: an identifier for imported images or a
        quoted string literal for inline URLs.
    directive : ImportDirective | None
        Import required by ``expression``; ``None`` for inline URLs.
    """

    expression: str
    directive: ImportDirective | None = None


@dc.dataclass(frozen=True, slots=True)
class RenderedView:
    """JSX body text and the ordered, deduplicated imports it relies on."""

    code: str
    imports: tuple[ImportDirective, ...]

    @property
    def import_header(self) -> str:
        """Return the import statements joined by newlines."""
        return "\n".join(directive.statement for directive in self.imports)


__all__ = [
    "EffectiveTag",
    "ImportDirective",
    "ImportOrigin",
    "RenderedView",
    "ResolvedAsset",
]
