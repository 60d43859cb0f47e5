"""Resolve component and asset references against the definition tables.

Resolution is lazy: documents keep component and asset names as plain strings
and are bound to definitions only while rendering, so the same document can
be rendered against different table snapshots. Every lookup failure is fatal;
nothing degrades to a placeholder.

Examples
--------
>>> from protojsx.proto import (
...     AssetDefinition, AssetKind, AssetTable, ComponentDefinition,
...     ComponentReference, ComponentTable, NumberLiteral, freeze_properties,
... )
>>> table = ComponentTable([
...     ComponentDefinition(
...         name="Spacer",
...         tag="div",
...         default_properties=freeze_properties({"a": NumberLiteral(1.0)}),
...     )
... ])
>>> resolve_component(ComponentReference("Spacer"), table).tag
'div'
>>> assets = AssetTable([AssetDefinition("Logo", AssetKind.IMAGE, path="logo.png")])
>>> resolve_asset("Logo", assets).expression
'Logo'
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from protojsx._constants import REMOTE_SCHEMES
from protojsx.proto.models import (
    AssetKind,
    ImportConflictError,
    InconsistentAssetDefinitionError,
    MissingRequiredPropertyError,
    freeze_properties,
)

from .models import EffectiveTag, ImportDirective, ImportOrigin, ResolvedAsset
from .syntax import js_string

if typ.TYPE_CHECKING:
    from protojsx.proto.models import (
        AssetTable,
        ComponentReference,
        ComponentTable,
        PropertyValue,
    )


class ImportCollector:
    """Ordered, identifier-keyed set of import directives for one render.

    The first directive recorded for an identifier wins; recording the same
    identifier again with the same source is a no-op, with a different source
    it raises :class:`ImportConflictError`.
    """

    def __init__(self) -> None:
        self._directives: dict[str, ImportDirective] = {}

    def add(self, directive: ImportDirective) -> None:
        """Record ``directive`` unless its identifier is already present."""
        existing = self._directives.get(directive.identifier)
        if existing is None:
            self._directives[directive.identifier] = directive
            return
        if existing.source != directive.source:
            raise ImportConflictError(
                directive.identifier, existing.source, directive.source
            )

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._directives

    def __len__(self) -> int:
        return len(self._directives)

    def directives(self) -> tuple[ImportDirective, ...]:
        """Return recorded directives in first-seen order."""
        return tuple(self._directives.values())


def merge_properties(
    defaults: cabc.Mapping[str, PropertyValue],
    overrides: cabc.Mapping[str, PropertyValue],
) -> dict[str, PropertyValue]:
    """Overlay ``overrides`` on ``defaults``.

    Keys keep their default position when overridden; keys only present in
    ``overrides`` follow in their own order.
    """
    merged = dict(defaults)
    merged.update(overrides)
    return merged


def resolve_component(
    reference: ComponentReference,
    table: ComponentTable,
    imports: ImportCollector | None = None,
) -> EffectiveTag:
    """Bind ``reference`` to its definition and merge its properties.

    Parameters
    ----------
    reference : ComponentReference
        Node naming the preset to apply.
    table : ComponentTable
        Component presets available to this render.
    imports : ImportCollector, optional
        Collector receiving the component's own module import when the
        definition declares an ``import_path``.

    Returns
    -------
    EffectiveTag
        Tag, class name, and merged properties to render in place of the
        reference.

    Raises
    ------
    UnknownComponentError
        If ``reference.component`` is not in ``table``.
    MissingRequiredPropertyError
        If the merged properties lack a property the definition requires.
    """
    definition = table.require(reference.component)
    merged = merge_properties(definition.default_properties, reference.properties)
    missing = [name for name in definition.required_properties if name not in merged]
    if missing:
        raise MissingRequiredPropertyError(definition.name, missing)
    if definition.import_path and imports is not None:
        imports.add(
            ImportDirective(
                identifier=definition.tag,
                source=definition.import_path,
                origin=ImportOrigin.COMPONENT,
            )
        )
    return EffectiveTag(
        tag=definition.tag,
        class_name=definition.class_name,
        properties=freeze_properties(merged),
        children_template=definition.children_template,
    )


def resolve_asset(
    name: str, table: AssetTable, imports: ImportCollector | None = None
) -> ResolvedAsset:
    """Decide how the asset called ``name`` is emitted.

    Local images become an import plus an identifier expression; remote images
    and every URL-based kind are inlined as string literals.

    Raises
    ------
    UnknownAssetError
        If ``name`` is not in ``table``.
    InconsistentAssetDefinitionError
        If the definition lacks the field its kind requires.
    """
    asset = table.require(name)
    match asset.kind:
        case AssetKind.IMAGE:
            if not asset.path:
                raise InconsistentAssetDefinitionError(asset.name, asset.kind, "path")
            if asset.path.startswith(REMOTE_SCHEMES):
                return ResolvedAsset(expression=js_string(asset.path))
            directive = ImportDirective(identifier=asset.name, source=asset.path)
            if imports is not None:
                imports.add(directive)
            return ResolvedAsset(expression=asset.name, directive=directive)
        case AssetKind.YOUTUBE | AssetKind.VIDEO | AssetKind.AUDIO:
            if not asset.url:
                raise InconsistentAssetDefinitionError(asset.name, asset.kind, "url")
            return ResolvedAsset(expression=js_string(asset.url))


__all__ = [
    "ImportCollector",
    "merge_properties",
    "resolve_asset",
    "resolve_component",
]
