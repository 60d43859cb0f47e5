"""Shared fixtures for protojsx tests.

The fixtures here build small in-memory definition tables and on-disk proto
workspaces under ``tmp_path`` so parser, renderer, and CLI tests exercise the
same data.
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from protojsx.proto import (
    AssetDefinition,
    AssetKind,
    AssetTable,
    ComponentDefinition,
    ComponentTable,
    NumberLiteral,
    StringLiteral,
    Text,
    freeze_properties,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

COMPONENTS_YAML = dedent(
    """
    components:
      - name: Card
        tag: div
        class_name: card
        default_props:
          role: {Str: region}
      - name: Hero
        tag: HeroBanner
        import_path: ./components/HeroBanner
        required_props: [title]
    """
)

ASSETS_YAML = dedent(
    """
    assets:
      - name: Logo
        kind: Image
        path: ./assets/logo.png
      - name: Intro
        kind: Youtube
        url: https://youtube.com/embed/x
    """
)

INDEX_YAML = dedent(
    """
    layouts:
      - name: main
        path: layouts/Main.jsx
    routes:
      - name: home
        path: /
        view: views/Home.jsx
        proto: views/home.yaml
        layout: main
      - path: /about
        view: views/About.jsx
        layout: main
    """
)

HOME_YAML = dedent(
    """
    name: Home
    body:
      Node:
        tag: main
        children:
          - ComponentRef:
              component: Card
              children:
                - Text: Welcome
          - Node:
              tag: img
              props:
                src: {Asset: Logo}
    """
)


@pytest.fixture
def components() -> ComponentTable:
    """Return a component table covering defaults, templates, and imports."""
    return ComponentTable(
        [
            ComponentDefinition(
                name="Card",
                tag="div",
                class_name="card",
                default_properties=freeze_properties(
                    {"a": NumberLiteral(1.0), "b": NumberLiteral(2.0)}
                ),
            ),
            ComponentDefinition(
                name="Hero",
                tag="HeroBanner",
                required_properties=("title",),
                import_path="./components/HeroBanner",
            ),
            ComponentDefinition(
                name="Button",
                tag="button",
                class_name="btn",
                default_properties=freeze_properties({"type": StringLiteral("button")}),
                children_template=Text("Click"),
            ),
        ]
    )


@pytest.fixture
def assets() -> AssetTable:
    """Return an asset table with local, remote, and URL-based media."""
    return AssetTable(
        [
            AssetDefinition("Logo", AssetKind.IMAGE, path="./assets/logo.png"),
            AssetDefinition("Intro", AssetKind.YOUTUBE, url="https://youtube.com/embed/x"),
            AssetDefinition(
                "Remote", AssetKind.IMAGE, path="https://cdn.example.com/a.jpg"
            ),
            AssetDefinition("Broken", AssetKind.VIDEO),
        ]
    )


@pytest.fixture
def proto_workspace(tmp_path: Path) -> Path:
    """Write a minimal proto workspace and return its ``proto`` directory."""
    proto_dir = tmp_path / "proto"
    (proto_dir / "views").mkdir(parents=True)
    (proto_dir / "components.yaml").write_text(COMPONENTS_YAML, encoding="utf-8")
    (proto_dir / "assets.yaml").write_text(ASSETS_YAML, encoding="utf-8")
    (proto_dir / "index.yaml").write_text(INDEX_YAML, encoding="utf-8")
    (proto_dir / "views" / "home.yaml").write_text(HOME_YAML, encoding="utf-8")
    return proto_dir
