"""Typed dataclasses describing proto documents, definitions, and routes."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ
from pathlib import PurePosixPath
from types import MappingProxyType


class ProtoError(ValueError):
    """Base class for every error raised while loading or rendering protos."""


class MalformedInputError(ProtoError):
    """Raised when a structured value does not match the proto grammar.

    Attributes
    ----------
    reason : str
        Human readable description of the violation.
    path : str | None
        Dotted field path within the structured value (for example
        ``body.Node.children[1].ComponentRef.props.src``).
    source : str | None
        File the value was read from, when known.
    """

    def __init__(
        self, reason: str, *, path: str | None = None, source: str | None = None
    ) -> None:
        self.reason = reason
        self.path = path
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        location = ":".join(part for part in (self.source, self.path) if part)
        return f"{location}: {self.reason}" if location else self.reason


class DuplicateDefinitionError(MalformedInputError):
    """Raised when a definition table declares the same name twice."""


class ResolutionError(ProtoError):
    """Base class for failures resolving symbolic references at render time."""


class UnknownComponentError(ResolutionError):
    """Raised when a component reference names an absent preset."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown component '{name}'.")


class UnknownAssetError(ResolutionError):
    """Raised when an asset reference names an absent asset."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown asset '{name}'.")


class InconsistentAssetDefinitionError(ResolutionError):
    """Raised when a referenced asset lacks the field its kind requires."""

    def __init__(self, name: str, kind: AssetKind, field: str) -> None:
        self.name = name
        self.kind = kind
        self.field = field
        super().__init__(
            f"Asset '{name}' of kind {kind.value} is missing its '{field}'."
        )


class MissingRequiredPropertyError(ResolutionError):
    """Raised when a component reference omits a required property."""

    def __init__(self, component: str, missing: cabc.Sequence[str]) -> None:
        self.component = component
        self.missing = tuple(missing)
        names = ", ".join(self.missing)
        super().__init__(f"Component '{component}' requires properties: {names}.")


class ImportConflictError(ResolutionError):
    """Raised when one identifier would be imported from two sources."""

    def __init__(self, identifier: str, first: str, second: str) -> None:
        self.identifier = identifier
        super().__init__(
            f"Identifier '{identifier}' imported from both '{first}' and '{second}'."
        )


@dc.dataclass(frozen=True, slots=True)
class StringLiteral:
    """Quoted string property."""

    value: str


@dc.dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Numeric property, always held as a float."""

    value: float


@dc.dataclass(frozen=True, slots=True)
class BooleanLiteral:
    """Boolean property."""

    value: bool


@dc.dataclass(frozen=True, slots=True)
class VariableReference:
    """Identifier expression passed through to the generated code verbatim."""

    name: str


@dc.dataclass(frozen=True, slots=True)
class AssetReference:
    """Reference to an :class:`AssetDefinition` resolved at render time."""

    name: str


PropertyValue = (
    StringLiteral | NumberLiteral | BooleanLiteral | VariableReference | AssetReference
)
Properties = cabc.Mapping[str, PropertyValue]


def freeze_properties(
    properties: cabc.Mapping[str, PropertyValue] | None = None,
) -> Properties:
    """Return a read-only, insertion-ordered copy of ``properties``."""
    return MappingProxyType(dict(properties or {}))


@dc.dataclass(frozen=True, slots=True)
class Text:
    """Literal text content."""

    content: str


@dc.dataclass(frozen=True, slots=True)
class Element:
    """A plain markup element with its own children."""

    tag: str
    class_name: str | None = None
    properties: Properties = dc.field(default_factory=freeze_properties)
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ComponentReference:
    """A symbolic reference to a :class:`ComponentDefinition`."""

    component: str
    properties: Properties = dc.field(default_factory=freeze_properties)
    children: tuple[Node, ...] = ()


Node = Text | Element | ComponentReference


class AssetKind(enum.Enum):
    """Closed set of media kinds an asset can describe."""

    IMAGE = "Image"
    YOUTUBE = "Youtube"
    VIDEO = "Video"
    AUDIO = "Audio"

    @property
    def required_field(self) -> str:
        """Return the definition field this kind needs to be emitted."""
        match self:
            case AssetKind.IMAGE:
                return "path"
            case AssetKind.YOUTUBE | AssetKind.VIDEO | AssetKind.AUDIO:
                return "url"


@dc.dataclass(frozen=True, slots=True)
class ComponentDefinition:
    """A reusable component preset."""

    name: str
    tag: str
    class_name: str | None = None
    default_properties: Properties = dc.field(default_factory=freeze_properties)
    required_properties: tuple[str, ...] = ()
    children_template: Node | None = None
    import_path: str | None = None


@dc.dataclass(frozen=True, slots=True)
class AssetDefinition:
    """Media metadata for a named asset."""

    name: str
    kind: AssetKind
    path: str | None = None
    url: str | None = None

    @property
    def is_consistent(self) -> bool:
        """Return whether the field required by ``kind`` is present."""
        return bool(getattr(self, self.kind.required_field))


_DefT = typ.TypeVar("_DefT", ComponentDefinition, AssetDefinition)


class _DefinitionTable(typ.Generic[_DefT]):
    """Immutable name-keyed lookup shared by every render call."""

    __slots__ = ("_entries",)

    def __init__(self, definitions: cabc.Iterable[_DefT] = ()) -> None:
        entries: dict[str, _DefT] = {}
        for definition in definitions:
            if definition.name in entries:
                msg = f"Duplicate definition name '{definition.name}'."
                raise DuplicateDefinitionError(msg)
            entries[definition.name] = definition
        self._entries: cabc.Mapping[str, _DefT] = MappingProxyType(entries)

    def get(self, name: str) -> _DefT | None:
        """Return the definition called ``name`` or ``None``."""
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> cabc.Iterator[_DefT]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> tuple[str, ...]:
        """Return definition names in declaration order."""
        return tuple(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._entries)!r})"


class ComponentTable(_DefinitionTable[ComponentDefinition]):
    """Lookup of component presets by name."""

    __slots__ = ()

    def require(self, name: str) -> ComponentDefinition:
        """Return the definition called ``name`` or raise ``UnknownComponentError``."""
        definition = self.get(name)
        if definition is None:
            raise UnknownComponentError(name)
        return definition


class AssetTable(_DefinitionTable[AssetDefinition]):
    """Lookup of media assets by name."""

    __slots__ = ()

    def require(self, name: str) -> AssetDefinition:
        """Return the definition called ``name`` or raise ``UnknownAssetError``."""
        definition = self.get(name)
        if definition is None:
            raise UnknownAssetError(name)
        return definition


@dc.dataclass(frozen=True, slots=True)
class ManualImport:
    """Import declared by hand in a view document."""

    name: str
    path: str


@dc.dataclass(frozen=True, slots=True)
class RouteMeta:
    """Informational route metadata carried by a view document."""

    path: str
    layout: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A parsed view document ready for one render pass."""

    body: Node
    name: str | None = None
    route_meta: RouteMeta | None = None
    imports: tuple[ManualImport, ...] = ()
    observer: bool = False


@dc.dataclass(frozen=True, slots=True)
class Layout:
    """A named layout component wrapping nested routes."""

    name: str
    path: str


@dc.dataclass(frozen=True, slots=True)
class Route:
    """A URL path bound to a view module and an optional layout."""

    path: str
    view: str
    name: str = ""
    layout: str | None = None
    proto: str | None = None

    @property
    def label(self) -> str:
        """Return the route name, falling back to the view module stem."""
        return self.name or PurePosixPath(self.view).stem


@dc.dataclass(frozen=True, slots=True)
class RouteIndex:
    """Routing metadata for a whole site."""

    routes: tuple[Route, ...]
    layouts: tuple[Layout, ...] = ()

    def get_layout(self, name: str) -> Layout | None:
        """Return the layout declared as ``name`` or ``None``."""
        return next((layout for layout in self.layouts if layout.name == name), None)


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
    "Properties",
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
]
