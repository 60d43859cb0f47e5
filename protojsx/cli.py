"""Cyclopts CLI entrypoint for generating React JSX modules from proto files.

The ``protojsx`` console script renders a whole site (every routed view plus
the router module) with ``protojsx generate``, or prints a single view module
to stdout with ``protojsx view``. Every option can also be supplied through a
``PROTOJSX_*`` environment variable, which suits CI pipelines.

Examples
--------
Generate the site using the default ``proto/`` layout:

>>> from protojsx.cli import main
>>> main()  # doctest: +SKIP

Render one view against explicit definition files:

>>> from protojsx.cli import app
>>> app(
...     ["view", "proto/views/home.yaml", "--components", "defs/components.yaml"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import (
    DEFAULT_ASSETS,
    DEFAULT_COMPONENTS,
    DEFAULT_INDEX,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_ROUTER_MODULE,
    ENV_PREFIX,
)
from .jsx import ViewModuleBuilder, render_view
from .proto import load_asset_table, load_component_table, load_document
from .site import SiteBuilder

app = App(name="protojsx", config=cyclopts.config.Env(ENV_PREFIX, command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render every routed view and the router module.")
def generate(
    *,
    index: typ.Annotated[
        Path, Parameter(help="Path to the route index", env_var="PROTOJSX_INDEX")
    ] = DEFAULT_INDEX,
    components: typ.Annotated[
        Path,
        Parameter(help="Path to component definitions", env_var="PROTOJSX_COMPONENTS"),
    ] = DEFAULT_COMPONENTS,
    assets: typ.Annotated[
        Path, Parameter(help="Path to asset definitions", env_var="PROTOJSX_ASSETS")
    ] = DEFAULT_ASSETS,
    output_dir: typ.Annotated[
        Path, Parameter(help="Root folder for generated modules", env_var="PROTOJSX_OUTPUT_DIR")
    ] = DEFAULT_OUTPUT_DIR,
    router_module: typ.Annotated[
        Path,
        Parameter(help="Router module path within the output folder"),
    ] = DEFAULT_ROUTER_MODULE,
    keep_going: typ.Annotated[
        bool, Parameter(help="Skip failing routes instead of aborting")
    ] = False,
    verbose: bool = False,
) -> None:
    """Generate the view modules and router module for a route index.

    Parameters
    ----------
    index : Path, optional
        Route index YAML; each route's ``proto`` is resolved relative to it.
    components : Path, optional
        Component definitions YAML shared by every view.
    assets : Path, optional
        Asset definitions YAML shared by every view.
    output_dir : Path, optional
        Folder the ``view`` paths and the router module are written under.
    router_module : Path, optional
        Router module location relative to ``output_dir``.
    keep_going : bool, optional
        Log and skip routes that fail to render rather than aborting.
    verbose : bool, optional
        Emit debug logging.

    Returns
    -------
    None
        Writes rendered modules and prints the generated paths.

    Raises
    ------
    ProtoError
        If a proto file is malformed or references an unknown component or
        asset (unless ``keep_going`` is set for per-route failures).
    """
    _configure_logging(verbose)
    builder = SiteBuilder(
        index_path=index,
        components_path=components,
        assets_path=assets,
        output_dir=output_dir,
        router_module=router_module,
        keep_going=keep_going,
    )
    for path in builder.run():
        print(f"wrote {_format_path(path)}")
    for route in builder.skipped:
        print(f"skipped {route.path}")


@app.command(help="Print the component module for a single view document.")
def view(
    document: Path,
    *,
    components: typ.Annotated[
        Path,
        Parameter(help="Path to component definitions", env_var="PROTOJSX_COMPONENTS"),
    ] = DEFAULT_COMPONENTS,
    assets: typ.Annotated[
        Path, Parameter(help="Path to asset definitions", env_var="PROTOJSX_ASSETS")
    ] = DEFAULT_ASSETS,
    name: typ.Annotated[
        str | None, Parameter(help="Component name when the document has none")
    ] = None,
    verbose: bool = False,
) -> None:
    """Render ``document`` and print the resulting module to stdout."""
    _configure_logging(verbose)
    parsed = load_document(document)
    rendered = render_view(
        parsed, load_component_table(components), load_asset_table(assets)
    )
    print(ViewModuleBuilder().build(parsed, rendered, name=name), end="")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``protojsx`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
