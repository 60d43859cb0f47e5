"""Load proto YAML files into typed documents, tables, and route indexes."""

from __future__ import annotations

import logging
import typing as typ

from ruamel.yaml import YAML

from .models import MalformedInputError
from .parser import (
    parse_asset_table,
    parse_component_table,
    parse_document,
    parse_route_index,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import AssetTable, ComponentTable, Document, RouteIndex

logger = logging.getLogger(__name__)

_ParsedT = typ.TypeVar("_ParsedT")


def read_structured(path: Path) -> typ.Any:
    """Return the generic structured value stored in the YAML file at ``path``.

    Raises
    ------
    FileNotFoundError
        If no file exists at ``path``.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if not path.exists():
        msg = f"Proto file '{path}' not found."
        raise FileNotFoundError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        return loader.load(handle)


def _load(path: Path, parse: typ.Callable[[typ.Any], _ParsedT]) -> _ParsedT:
    raw = read_structured(path)
    try:
        return parse(raw)
    except MalformedInputError as exc:
        raise type(exc)(exc.reason, path=exc.path, source=str(path)) from exc


def load_document(path: Path) -> Document:
    """Load a view document from ``path``.

    Examples
    --------
    >>> from pathlib import Path
    >>> document = load_document(Path("proto/views/home.yaml"))  # doctest: +SKIP
    >>> document.name  # doctest: +SKIP
    'Home'
    """
    document = _load(path, parse_document)
    logger.debug("loaded view document %s from %s", document.name, path)
    return document


def load_component_table(path: Path) -> ComponentTable:
    """Load the component preset table from ``path``."""
    table = _load(path, parse_component_table)
    logger.debug("loaded %d component definitions from %s", len(table), path)
    return table


def load_asset_table(path: Path) -> AssetTable:
    """Load the asset table from ``path``.

    Assets lacking the field their kind requires still load; they are reported
    here and only fail when a document references them.
    """
    table = _load(path, parse_asset_table)
    for asset in table:
        if not asset.is_consistent:
            logger.warning(
                "asset '%s' of kind %s in %s has no '%s'",
                asset.name,
                asset.kind.value,
                path,
                asset.kind.required_field,
            )
    logger.debug("loaded %d asset definitions from %s", len(table), path)
    return table


def load_route_index(path: Path) -> RouteIndex:
    """Load the site route index from ``path``."""
    index = _load(path, parse_route_index)
    logger.debug(
        "loaded %d routes and %d layouts from %s",
        len(index.routes),
        len(index.layouts),
        path,
    )
    return index


__all__ = [
    "load_asset_table",
    "load_component_table",
    "load_document",
    "load_route_index",
    "read_structured",
]
