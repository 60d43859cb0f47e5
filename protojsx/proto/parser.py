"""Deserialize structured values into proto documents, tables, and routes.

The parsers here accept the generic values produced by a YAML (or JSON)
loader and build the immutable dataclasses from :mod:`protojsx.proto.models`.
Tagged unions are single-key mappings, mirroring the node and property
variants one to one:

.. code-block:: yaml

    body:
      Node:
        tag: section
        class_name: hero
        children:
          - Text: Welcome
          - ComponentRef:
              component: PrimaryButton
              props:
                href: {Str: /signup}

Every failure raises :class:`MalformedInputError` carrying the dotted path of
the offending field; no partially built value is ever returned.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from protojsx._constants import JS_IDENTIFIER

from .helpers import (
    _describe,
    _expect_mapping,
    _expect_sequence,
    _field_path,
    _optional_bool,
    _optional_sequence,
    _optional_str,
    _require_str,
    _unwrap_variant,
)
from .models import (
    AssetDefinition,
    AssetKind,
    AssetReference,
    AssetTable,
    BooleanLiteral,
    ComponentDefinition,
    ComponentReference,
    ComponentTable,
    Document,
    DuplicateDefinitionError,
    Element,
    Layout,
    MalformedInputError,
    ManualImport,
    Node,
    NumberLiteral,
    Properties,
    PropertyValue,
    Route,
    RouteIndex,
    RouteMeta,
    StringLiteral,
    Text,
    VariableReference,
    freeze_properties,
)

NODE_VARIANTS = ("Text", "Node", "ComponentRef")
PROPERTY_VARIANTS = ("Str", "Num", "Bool", "Var", "Asset")
ASSET_KINDS = tuple(kind.value for kind in AssetKind)


def parse_property_value(value: object, path: str = "value") -> PropertyValue:
    """Parse one tagged property value such as ``{Str: "hello"}``."""
    tag, payload, payload_path = _unwrap_variant(value, path, PROPERTY_VARIANTS)
    match tag:
        case "Str":
            return StringLiteral(_expect_text(payload, payload_path))
        case "Num":
            return NumberLiteral(_expect_number(payload, payload_path))
        case "Bool":
            if not isinstance(payload, bool):
                msg = f"expected a boolean, got {_describe(payload)}"
                raise MalformedInputError(msg, path=payload_path)
            return BooleanLiteral(payload)
        case "Var":
            return VariableReference(_expect_identifier(payload, payload_path))
        case _:
            return AssetReference(_expect_identifier(payload, payload_path))


def parse_properties(value: object, path: str) -> Properties:
    """Parse a ``props`` mapping, preserving the declared key order."""
    if value is None:
        return freeze_properties()
    mapping = _expect_mapping(value, path)
    parsed: dict[str, PropertyValue] = {}
    for key, raw in mapping.items():
        if not isinstance(key, str) or not key:
            msg = f"property names must be non-empty strings, got {key!r}"
            raise MalformedInputError(msg, path=path)
        parsed[key] = parse_property_value(raw, _field_path(path, key))
    return freeze_properties(parsed)


def parse_node(value: object, path: str = "node") -> Node:
    """Parse a tagged node, recursing into its children."""
    tag, payload, payload_path = _unwrap_variant(value, path, NODE_VARIANTS)
    if tag == "Text":
        return Text(_expect_text(payload, payload_path))

    body = _expect_mapping(payload, payload_path)
    properties = parse_properties(body.get("props"), _field_path(payload_path, "props"))
    children = _parse_children(body, payload_path)
    if tag == "Node":
        return Element(
            tag=_require_identifier(body, "tag", payload_path),
            class_name=_optional_str(body, "class_name", payload_path),
            properties=properties,
            children=children,
        )
    return ComponentReference(
        component=_require_identifier(body, "component", payload_path),
        properties=properties,
        children=children,
    )


def _parse_children(body: cabc.Mapping[str, typ.Any], path: str) -> tuple[Node, ...]:
    children_path = _field_path(path, "children")
    return tuple(
        parse_node(child, _field_path(children_path, index))
        for index, child in enumerate(_optional_sequence(body, "children", path))
    )


def parse_document(value: object) -> Document:
    """Parse a view document mapping with a ``body`` node."""
    payload = _expect_mapping(value, "document")
    if "body" not in payload:
        msg = "missing required field 'body'"
        raise MalformedInputError(msg, path="document")
    imports = tuple(
        _parse_manual_import(item, _field_path("imports", index))
        for index, item in enumerate(_optional_sequence(payload, "imports", ""))
    )
    route_meta = None
    if payload.get("route_meta") is not None:
        meta = _expect_mapping(payload["route_meta"], "route_meta")
        route_meta = RouteMeta(
            path=_require_str(meta, "path", "route_meta"),
            layout=_optional_str(meta, "layout", "route_meta"),
        )
    name = _optional_str(payload, "name", "")
    if name is not None:
        _expect_binding(name, "name")
    return Document(
        body=parse_node(payload["body"], "body"),
        name=name,
        route_meta=route_meta,
        imports=imports,
        observer=_optional_bool(payload, "observer", ""),
    )


def _parse_manual_import(value: object, path: str) -> ManualImport:
    item = _expect_mapping(value, path)
    return ManualImport(
        name=_expect_binding(
            _require_str(item, "name", path), _field_path(path, "name")
        ),
        path=_require_str(item, "path", path),
    )


def parse_component_definition(value: object, path: str) -> ComponentDefinition:
    """Parse one component preset entry."""
    payload = _expect_mapping(value, path)
    required = tuple(
        _expect_text(item, _field_path(_field_path(path, "required_props"), index))
        for index, item in enumerate(_optional_sequence(payload, "required_props", path))
    )
    template = payload.get("children_template")
    tag = _require_identifier(payload, "tag", path)
    import_path = _optional_str(payload, "import_path", path)
    if import_path is not None:
        _expect_binding(tag, _field_path(path, "tag"))
    return ComponentDefinition(
        name=_require_str(payload, "name", path),
        tag=tag,
        class_name=_optional_str(payload, "class_name", path),
        default_properties=parse_properties(
            payload.get("default_props"), _field_path(path, "default_props")
        ),
        required_properties=required,
        children_template=(
            parse_node(template, _field_path(path, "children_template"))
            if template is not None
            else None
        ),
        import_path=import_path,
    )


def parse_asset_definition(value: object, path: str) -> AssetDefinition:
    """Parse one asset entry."""
    payload = _expect_mapping(value, path)
    kind_path = _field_path(path, "kind")
    kind_value = _require_str(payload, "kind", path)
    try:
        kind = AssetKind(kind_value)
    except ValueError as exc:
        expected = ", ".join(ASSET_KINDS)
        msg = f"unknown asset kind '{kind_value}' (expected one of: {expected})"
        raise MalformedInputError(msg, path=kind_path) from exc
    name = _require_identifier(payload, "name", path)
    if kind is AssetKind.IMAGE:
        _expect_binding(name, _field_path(path, "name"))
    return AssetDefinition(
        name=name,
        kind=kind,
        path=_optional_str(payload, "path", path),
        url=_optional_str(payload, "url", path),
    )


def parse_component_table(value: object) -> ComponentTable:
    """Parse a component definitions file into an immutable table.

    The file is either a bare sequence of definitions or a mapping holding the
    sequence under ``components``. Duplicate names are rejected.
    """
    entries, path = _definition_entries(value, "components")
    definitions = [
        parse_component_definition(item, _field_path(path, index))
        for index, item in enumerate(entries)
    ]
    _reject_duplicates(definitions, path)
    return ComponentTable(definitions)


def parse_asset_table(value: object) -> AssetTable:
    """Parse an asset definitions file into an immutable table.

    Accepts the same two shapes as :func:`parse_component_table`, keyed by
    ``assets``. Duplicate names are rejected.
    """
    entries, path = _definition_entries(value, "assets")
    definitions = [
        parse_asset_definition(item, _field_path(path, index))
        for index, item in enumerate(entries)
    ]
    _reject_duplicates(definitions, path)
    return AssetTable(definitions)


def _definition_entries(value: object, key: str) -> tuple[cabc.Sequence[typ.Any], str]:
    if isinstance(value, cabc.Mapping):
        if key not in value:
            msg = f"missing required field '{key}'"
            raise MalformedInputError(msg, path=key)
        return _expect_sequence(value[key], key), key
    return _expect_sequence(value, key), key


def _reject_duplicates(
    definitions: cabc.Sequence[ComponentDefinition | AssetDefinition], path: str
) -> None:
    seen: set[str] = set()
    for index, definition in enumerate(definitions):
        if definition.name in seen:
            msg = f"duplicate definition name '{definition.name}'"
            raise DuplicateDefinitionError(msg, path=_field_path(path, index))
        seen.add(definition.name)


def parse_route_index(value: object) -> RouteIndex:
    """Parse the site index listing layouts and routes.

    Route order is preserved exactly. A route's ``layout`` must name one of the
    declared layouts.
    """
    payload = _expect_mapping(value, "index")
    if "routes" not in payload:
        msg = "missing required field 'routes'"
        raise MalformedInputError(msg, path="index")
    layouts: list[Layout] = []
    for index, item in enumerate(_optional_sequence(payload, "layouts", "")):
        path = _field_path("layouts", index)
        entry = _expect_mapping(item, path)
        layout = Layout(
            name=_require_str(entry, "name", path),
            path=_require_str(entry, "path", path),
        )
        if any(existing.name == layout.name for existing in layouts):
            msg = f"duplicate layout name '{layout.name}'"
            raise DuplicateDefinitionError(msg, path=path)
        layouts.append(layout)

    declared = {layout.name for layout in layouts}
    routes: list[Route] = []
    for index, item in enumerate(_expect_sequence(payload["routes"], "routes")):
        path = _field_path("routes", index)
        entry = _expect_mapping(item, path)
        layout_name = _optional_str(entry, "layout", path)
        if layout_name is not None and layout_name not in declared:
            msg = f"route references undeclared layout '{layout_name}'"
            raise MalformedInputError(msg, path=_field_path(path, "layout"))
        routes.append(
            Route(
                path=_require_str(entry, "path", path),
                view=_require_str(entry, "view", path),
                name=_optional_str(entry, "name", path) or "",
                layout=layout_name,
                proto=_optional_str(entry, "proto", path),
            )
        )
    return RouteIndex(routes=tuple(routes), layouts=tuple(layouts))


def _expect_text(value: object, path: str) -> str:
    if not isinstance(value, str):
        msg = f"expected a string, got {_describe(value)}"
        raise MalformedInputError(msg, path=path)
    return value


def _expect_identifier(value: object, path: str) -> str:
    text = _expect_text(value, path)
    if not text.strip():
        msg = "expected a non-empty name"
        raise MalformedInputError(msg, path=path)
    return text


def _require_identifier(payload: cabc.Mapping[str, typ.Any], key: str, path: str) -> str:
    return _expect_identifier(_require_str(payload, key, path), _field_path(path, key))


def _expect_binding(name: str, path: str) -> str:
    # The generated module binds this name as a JavaScript identifier.
    if not JS_IDENTIFIER.fullmatch(name):
        msg = f"'{name}' is not a valid JavaScript identifier"
        raise MalformedInputError(msg, path=path)
    return name


def _expect_number(value: object, path: str) -> float:
    # bool is an int subclass; YAML booleans must not pass as numbers.
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"expected a number, got {_describe(value)}"
        raise MalformedInputError(msg, path=path)
    try:
        return float(value)
    except OverflowError as exc:
        msg = "number out of float64 range"
        raise MalformedInputError(msg, path=path) from exc


__all__ = [
    "ASSET_KINDS",
    "NODE_VARIANTS",
    "PROPERTY_VARIANTS",
    "parse_asset_definition",
    "parse_asset_table",
    "parse_component_definition",
    "parse_component_table",
    "parse_document",
    "parse_node",
    "parse_properties",
    "parse_property_value",
    "parse_route_index",
]
