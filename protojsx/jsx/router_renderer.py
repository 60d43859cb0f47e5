"""Render a route index into a React Router ``useRoutes`` module.

The router module imports each layout and view component once, then lists
every route in the order the index declares them. Runs of consecutive routes
sharing a layout are nested under a single pathless layout route so the
layout stays mounted while navigating between them. No component or asset
definitions are consulted here and view documents are never read.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import posixpath
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from protojsx._constants import DEFAULT_IMPORT_PREFIX, ROUTER_BINDINGS

from .models import ImportDirective, ImportOrigin
from .syntax import js_string

if typ.TYPE_CHECKING:
    from protojsx.proto.models import RouteIndex

logger = logging.getLogger(__name__)

_WORD_PATTERN = re.compile(r"[A-Za-z0-9]+")


def component_identifier(label: str, suffix: str = "") -> str:
    """Return a PascalCase JavaScript identifier derived from ``label``.

    >>> component_identifier("about-us")
    'AboutUs'
    >>> component_identifier("main", "Layout")
    'MainLayout'
    """
    words = _WORD_PATTERN.findall(label)
    base = "".join(word[:1].upper() + word[1:] for word in words) or "View"
    if base[0].isdigit():
        base = f"View{base}"
    return f"{base}{suffix}"


class _IdentifierRegistry:
    """Assign one unique identifier per module path."""

    def __init__(self, reserved: cabc.Iterable[str] = ()) -> None:
        self._by_path: dict[str, str] = {}
        self._used: set[str] = set(reserved)

    def assign(self, path: str, base: str) -> str:
        if path in self._by_path:
            return self._by_path[path]
        candidate = base
        counter = 2
        while candidate in self._used:
            candidate = f"{base}{counter}"
            counter += 1
        self._by_path[path] = candidate
        self._used.add(candidate)
        return candidate


@dc.dataclass(frozen=True, slots=True)
class RouteEntry:
    """One route line in the generated table."""

    path: str
    identifier: str


@dc.dataclass(slots=True)
class RouteGroup:
    """Consecutive routes sharing a layout (or sharing none)."""

    layout: str | None
    routes: list[RouteEntry] = dc.field(default_factory=list)


class RouterRenderer:
    """Render the routing module for a :class:`RouteIndex`."""

    def __init__(
        self,
        *,
        import_prefix: str = DEFAULT_IMPORT_PREFIX,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the renderer and its Jinja environment.

        Parameters
        ----------
        import_prefix : str, optional
            Prefix joined onto every layout and view path in the import
            statements, relative to where the router module is written.
            Defaults to ``"../"``.
        templates_dir : Path, optional
            Directory containing ``router_module.jsx.jinja``. Defaults to
            ``protojsx/templates``.
        """
        self.import_prefix = import_prefix
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("router_module.jsx.jinja")

    def render(self, index: RouteIndex) -> str:
        """Return router module source for ``index``."""
        registry = _IdentifierRegistry(ROUTER_BINDINGS)
        used_layouts = {route.layout for route in index.routes if route.layout}
        layout_imports: list[ImportDirective] = []
        layout_identifiers: dict[str, str] = {}
        for layout in index.layouts:
            if layout.name not in used_layouts:
                continue
            directive = self._import(layout.path, layout.name, "Layout", registry)
            layout_imports.append(directive)
            layout_identifiers[layout.name] = directive.identifier

        view_imports: list[ImportDirective] = []
        imported_views: set[str] = set()
        groups: list[RouteGroup] = []
        for route in index.routes:
            directive = self._import(route.view, route.label, "", registry)
            if route.view not in imported_views:
                imported_views.add(route.view)
                view_imports.append(directive)
            identifier = directive.identifier
            layout = layout_identifiers.get(route.layout) if route.layout else None
            if not groups or groups[-1].layout != layout:
                groups.append(RouteGroup(layout=layout))
            groups[-1].routes.append(
                RouteEntry(path=js_string(route.path), identifier=identifier)
            )

        logger.debug(
            "rendered router with %d routes in %d groups", len(index.routes), len(groups)
        )
        source = self.template.render(
            layout_imports=layout_imports,
            view_imports=view_imports,
            entries=groups,
        )
        if not source.endswith("\n"):
            source += "\n"
        return source

    def _module_source(self, path: str) -> str:
        return posixpath.join(self.import_prefix, path) if self.import_prefix else path

    def _import(
        self, path: str, label: str, suffix: str, registry: _IdentifierRegistry
    ) -> ImportDirective:
        return ImportDirective(
            identifier=registry.assign(path, component_identifier(label, suffix)),
            source=self._module_source(path),
            origin=ImportOrigin.COMPONENT,
        )


def render_router(index: RouteIndex, *, import_prefix: str = DEFAULT_IMPORT_PREFIX) -> str:
    """Return router module source for ``index`` using the packaged template."""
    return RouterRenderer(import_prefix=import_prefix).render(index)


__all__ = [
    "RouteEntry",
    "RouteGroup",
    "RouterRenderer",
    "component_identifier",
    "render_router",
]
