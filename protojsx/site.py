"""Site build pipeline: render every routed view plus the router module.

``SiteBuilder`` loads the definition tables once, walks the route index in
order, renders each route's proto document into its view module, and finally
writes the router module. Proto paths are resolved relative to the index
file; view and router modules are written beneath the output directory.

Typical usage mirrors the ``protojsx generate`` command:

>>> from pathlib import Path
>>> builder = SiteBuilder(
...     index_path=Path("proto/index.yaml"),
...     components_path=Path("proto/components.yaml"),
...     assets_path=Path("proto/assets.yaml"),
...     output_dir=Path("src"),
... )  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
[PosixPath('src/views/Home.jsx'), PosixPath('src/router/index.jsx')]
"""

from __future__ import annotations

import logging
import posixpath
import typing as typ
from pathlib import Path

from ruamel.yaml.error import YAMLError

from ._constants import DEFAULT_ROUTER_MODULE
from .jsx import RouterRenderer, ViewModuleBuilder, ViewRenderer, component_identifier
from .proto import (
    ProtoError,
    load_asset_table,
    load_component_table,
    load_document,
    load_route_index,
)

if typ.TYPE_CHECKING:
    from .proto import Route

logger = logging.getLogger(__name__)


class SiteBuilder:
    """Render all view modules and the router module for one route index."""

    def __init__(
        self,
        *,
        index_path: Path,
        components_path: Path,
        assets_path: Path,
        output_dir: Path,
        router_module: Path = DEFAULT_ROUTER_MODULE,
        keep_going: bool = False,
    ) -> None:
        """Load the route index and definition tables.

        Parameters
        ----------
        index_path : Path
            Route index YAML; ``proto`` entries are relative to its directory.
        components_path : Path
            Component definitions YAML.
        assets_path : Path
            Asset definitions YAML.
        output_dir : Path
            Root the view modules and router module are written under.
        router_module : Path, optional
            Router module location relative to ``output_dir``. Defaults to
            ``router/index.jsx``.
        keep_going : bool, optional
            Skip routes whose document fails to load or render instead of
            aborting the build. Defaults to ``False``.
        """
        self.index_path = index_path
        self.output_dir = output_dir
        self.router_module = router_module
        self.keep_going = keep_going
        self.index = load_route_index(index_path)
        self.view_renderer = ViewRenderer(
            load_component_table(components_path), load_asset_table(assets_path)
        )
        self.module_builder = ViewModuleBuilder()
        self.skipped: list[Route] = []

    def run(self) -> list[Path]:
        """Write every view module and the router module, returning their paths."""
        written: list[Path] = []
        rendered_views: set[str] = set()
        for route in self.index.routes:
            if route.proto is None or route.view in rendered_views:
                continue
            rendered_views.add(route.view)
            try:
                written.append(self._write_view(route, route.proto))
            except (ProtoError, FileNotFoundError, YAMLError):
                if not self.keep_going:
                    raise
                logger.exception("skipping route %s (%s)", route.path, route.proto)
                self.skipped.append(route)
        written.append(self._write_router())
        return written

    def _write_view(self, route: Route, proto: str) -> Path:
        document = load_document(self.index_path.parent / proto)
        rendered = self.view_renderer.render(document)
        name = document.name or component_identifier(route.label)
        source = self.module_builder.build(document, rendered, name=name)
        output_path = self.output_dir / route.view
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(source, encoding="utf-8")
        return output_path

    def _write_router(self) -> Path:
        output_path = self.output_dir / self.router_module
        depth = len(self.router_module.parent.parts)
        prefix = posixpath.join(*([".."] * depth)) + "/" if depth else "./"
        source = RouterRenderer(import_prefix=prefix).render(self.index)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(source, encoding="utf-8")
        return output_path


__all__ = ["SiteBuilder"]
