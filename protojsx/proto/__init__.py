"""Load and validate proto documents, definition tables, and route indexes.

This subpackage turns the YAML files describing a site into immutable,
strongly typed dataclasses (:class:`Document`, :class:`ComponentTable`,
:class:`AssetTable`, :class:`RouteIndex`) that the JSX renderers consume.
The ``parse_*`` functions work on already-decoded structured values; the
``load_*`` functions read a YAML file first and annotate any
:class:`MalformedInputError` with the file name.

Examples
--------
>>> from pathlib import Path
>>> from protojsx.proto import load_component_table, parse_node
>>> parse_node({"Text": "hello"})
Text(content='hello')
>>> table = load_component_table(Path("proto/components.yaml"))  # doctest: +SKIP
>>> table.require("PrimaryButton").tag  # doctest: +SKIP
'button'
"""

from .loader import (
    load_asset_table,
    load_component_table,
    load_document,
    load_route_index,
    read_structured,
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
    ImportConflictError,
    InconsistentAssetDefinitionError,
    Layout,
    MalformedInputError,
    ManualImport,
    MissingRequiredPropertyError,
    Node,
    NumberLiteral,
    PropertyValue,
    ProtoError,
    ResolutionError,
    Route,
    RouteIndex,
    RouteMeta,
    StringLiteral,
    Text,
    UnknownAssetError,
    UnknownComponentError,
    VariableReference,
    freeze_properties,
)
from .parser import (
    parse_asset_table,
    parse_component_table,
    parse_document,
    parse_node,
    parse_property_value,
    parse_route_index,
)

__all__ = [
    "AssetDefinition",
    "AssetKind",
    "AssetReference",
    "AssetTable",
    "BooleanLiteral",
    "ComponentDefinition",
    "ComponentReference",
    "ComponentTable",
    "Document",
    "DuplicateDefinitionError",
    "Element",
    "ImportConflictError",
    "InconsistentAssetDefinitionError",
    "Layout",
    "MalformedInputError",
    "ManualImport",
    "MissingRequiredPropertyError",
    "Node",
    "NumberLiteral",
    "PropertyValue",
    "ProtoError",
    "ResolutionError",
    "Route",
    "RouteIndex",
    "RouteMeta",
    "StringLiteral",
    "Text",
    "UnknownAssetError",
    "UnknownComponentError",
    "VariableReference",
    "freeze_properties",
    "load_asset_table",
    "load_component_table",
    "load_document",
    "load_route_index",
    "parse_asset_table",
    "parse_component_table",
    "parse_document",
    "parse_node",
    "parse_property_value",
    "parse_route_index",
    "read_structured",
]
