"""Unit tests for view rendering and module assembly.

These tests drive ``protojsx.jsx.render_view`` over hand-built document
trees and compare the emitted JSX line for line. They cover attribute
formatting for every property kind, text escaping, the self-closing policy,
component and asset resolution during the walk, import deduplication, and
the module wrapper produced by ``build_view_module``.

Usage
-----
Run ``pytest tests/test_view_renderer.py -v``. The ``components`` and
``assets`` fixtures come from ``tests/conftest.py``.
"""

from __future__ import annotations

import pytest

from protojsx.jsx import build_view_module, render_view
from protojsx.proto import (
    AssetDefinition,
    AssetKind,
    AssetReference,
    AssetTable,
    BooleanLiteral,
    ComponentReference,
    ComponentTable,
    Document,
    Element,
    ImportConflictError,
    MalformedInputError,
    ManualImport,
    NumberLiteral,
    StringLiteral,
    Text,
    UnknownComponentError,
    VariableReference,
    freeze_properties,
)


def _render(node: object, components: ComponentTable, assets: AssetTable) -> str:
    return render_view(Document(body=node), components, assets).code  # type: ignore[arg-type]


def test_element_with_class_and_text(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Elements emit className first, then properties, then children."""
    node = Element(
        "section",
        class_name="hero",
        properties=freeze_properties({"id": StringLiteral("top")}),
        children=(Text("Hello"),),
    )
    assert _render(node, components, assets) == (
        '    <section className="hero" id="top">\n'
        "      Hello\n"
        "    </section>\n"
    )


def test_component_reference_uses_merged_properties(
    components: ComponentTable, assets: AssetTable
) -> None:
    """References render as their definition's tag with merged properties."""
    node = ComponentReference(
        "Card",
        properties=freeze_properties({"b": NumberLiteral(3.0), "c": NumberLiteral(4.0)}),
    )
    assert _render(node, components, assets) == (
        '    <div className="card" a={1} b={3} c={4}></div>\n'
    )


def test_reference_children_render_verbatim(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Children of a reference are its own, not merged with defaults."""
    node = ComponentReference(
        "Card", children=(Element("p", children=(Text("Body"),)),)
    )
    assert _render(node, components, assets) == (
        '    <div className="card" a={1} b={2}>\n'
        "      <p>\n"
        "        Body\n"
        "      </p>\n"
        "    </div>\n"
    )


def test_children_template_fills_empty_reference(
    components: ComponentTable, assets: AssetTable
) -> None:
    """A definition's children template applies when the reference has none."""
    assert _render(ComponentReference("Button"), components, assets) == (
        '    <button className="btn" type="button">\n'
        "      Click\n"
        "    </button>\n"
    )


def test_unknown_component_aborts_render(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Rendering an unknown component fails instead of emitting a bare tag."""
    node = Element("main", children=(ComponentReference("Ghost"),))
    with pytest.raises(UnknownComponentError):
        _render(node, components, assets)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (StringLiteral("plain"), 'x="plain"'),
        (StringLiteral('say "hi"'), 'x={"say \\"hi\\""}'),
        (NumberLiteral(0.5), "x={0.5}"),
        (NumberLiteral(-2.0), "x={-2}"),
        (NumberLiteral(-0.0), "x={-0}"),
        (NumberLiteral(float("inf")), "x={Infinity}"),
        (BooleanLiteral(True), "x"),
        (BooleanLiteral(False), "x={false}"),
        (VariableReference("handleClick"), "x={handleClick}"),
    ],
)
def test_property_formatting(
    value: object, expected: str, components: ComponentTable, assets: AssetTable
) -> None:
    """Each property kind has a fixed attribute form."""
    node = Element("input", properties=freeze_properties({"x": value}))  # type: ignore[dict-item]
    assert _render(node, components, assets) == f"    <input {expected} />\n"


def test_class_name_property_wins(
    components: ComponentTable, assets: AssetTable
) -> None:
    """An explicit className property replaces the element's class name."""
    node = Element(
        "div",
        class_name="static",
        properties=freeze_properties({"className": VariableReference("cls")}),
    )
    assert _render(node, components, assets) == "    <div className={cls}></div>\n"


def test_text_is_escaped_for_jsx(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Markup characters and braces in text cannot break out of JSX."""
    node = Element("p", children=(Text("a < b & {c}"),))
    assert _render(node, components, assets) == (
        "    <p>\n"
        '      a &lt; b &amp; {"{"}c{"}"}\n'
        "    </p>\n"
    )


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("img", "    <img />\n"),
        ("br", "    <br />\n"),
        ("div", "    <div></div>\n"),
        ("Widget", "    <Widget />\n"),
        ("Icons.Star", "    <Icons.Star />\n"),
    ],
)
def test_self_closing_policy(
    tag: str, expected: str, components: ComponentTable, assets: AssetTable
) -> None:
    """Only void HTML tags and component tags self-close when empty."""
    assert _render(Element(tag), components, assets) == expected


def test_repeated_image_yields_one_import(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Three references to one image produce a single import directive."""
    image = Element("img", properties=freeze_properties({"src": AssetReference("Logo")}))
    document = Document(body=Element("div", children=(image, image, image)))
    rendered = render_view(document, components, assets)
    assert [directive.identifier for directive in rendered.imports] == ["Logo"]
    assert rendered.code.count("src={Logo}") == 3
    assert "./assets/logo.png" not in rendered.code


def test_youtube_asset_is_inline(components: ComponentTable, assets: AssetTable) -> None:
    """URL-based assets are embedded literally and import nothing."""
    document = Document(
        body=Element("iframe", properties=freeze_properties({"src": AssetReference("Intro")}))
    )
    rendered = render_view(document, components, assets)
    assert 'src={"https://youtube.com/embed/x"}' in rendered.code
    assert rendered.imports == ()


def test_imports_keep_first_seen_order(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Component and asset imports are returned in walk order."""
    hero = ComponentReference(
        "Hero", properties=freeze_properties({"title": StringLiteral("Hi")})
    )
    image = Element("img", properties=freeze_properties({"src": AssetReference("Logo")}))
    rendered = render_view(
        Document(body=Element("main", children=(hero, image))), components, assets
    )
    assert [directive.identifier for directive in rendered.imports] == [
        "HeroBanner",
        "Logo",
    ]
    assert '      <HeroBanner title="Hi" />\n' in rendered.code


def test_rendering_is_deterministic(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Rendering the same document twice yields identical output."""
    image = Element("img", properties=freeze_properties({"src": AssetReference("Logo")}))
    document = Document(body=Element("div", children=(ComponentReference("Card"), image)))
    first = render_view(document, components, assets)
    second = render_view(document, components, assets)
    assert first == second


def test_build_view_module_with_observer_and_manual_imports(
    components: ComponentTable, assets: AssetTable
) -> None:
    """The module wrapper orders imports and wraps the export in observer."""
    document = Document(
        name="Home",
        body=Element("img", properties=freeze_properties({"src": AssetReference("Logo")})),
        observer=True,
        imports=(ManualImport("useStore", "./store"), ManualImport("Logo", "./dup.png")),
    )
    rendered = render_view(document, components, assets)
    assert build_view_module(document, rendered) == (
        "import React from 'react';\n"
        'import { observer } from "mobx-react";\n'
        "\n"
        "import Logo from './assets/logo.png';\n"
        "import useStore from './store';\n"
        "\n"
        "function Home() {\n"
        "  return (\n"
        "    <img src={Logo} />\n"
        "  );\n"
        "}\n"
        "\n"
        "export default observer(Home);\n"
    )


def test_build_view_module_without_imports(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Modules without imports go straight from React to the component."""
    document = Document(body=Element("p", children=(Text("Hi"),)))
    rendered = render_view(document, components, assets)
    assert build_view_module(document, rendered, name="About") == (
        "import React from 'react';\n"
        "\n"
        "function About() {\n"
        "  return (\n"
        "    <p>\n"
        "      Hi\n"
        "    </p>\n"
        "  );\n"
        "}\n"
        "\n"
        "export default About;\n"
    )


def test_build_view_module_requires_a_name(
    components: ComponentTable, assets: AssetTable
) -> None:
    """A module cannot be built without a component name."""
    document = Document(body=Text("x"))
    rendered = render_view(document, components, assets)
    with pytest.raises(MalformedInputError):
        build_view_module(document, rendered)


def test_empty_body_returns_null(components: ComponentTable, assets: AssetTable) -> None:
    """A body that renders no lines still yields a valid return expression."""
    document = Document(name="Blank", body=Text("  \n  "))
    rendered = render_view(document, components, assets)
    assert rendered.code == "    null\n"
    assert "  return (\n    null\n  );\n" in build_view_module(document, rendered)


def test_component_name_clashing_with_import_is_rejected(
    components: ComponentTable,
) -> None:
    """A module cannot import a binding under its own component name."""
    assets = AssetTable([AssetDefinition("Home", AssetKind.IMAGE, path="./home.png")])
    document = Document(
        name="Home",
        body=Element("img", properties=freeze_properties({"src": AssetReference("Home")})),
    )
    rendered = render_view(document, components, assets)
    with pytest.raises(MalformedInputError) as excinfo:
        build_view_module(document, rendered)
    assert excinfo.value.path == "name"


@pytest.mark.parametrize("name", ["React", "observer"])
def test_component_name_clashing_with_template_binding_is_rejected(
    name: str, components: ComponentTable, assets: AssetTable
) -> None:
    """The component may not shadow the names the module imports itself."""
    document = Document(name=name, body=Text("x"), observer=True)
    rendered = render_view(document, components, assets)
    with pytest.raises(MalformedInputError):
        build_view_module(document, rendered)


def test_manual_import_rebinding_react_is_rejected(
    components: ComponentTable, assets: AssetTable
) -> None:
    """Hand-declared imports cannot rebind ``React``."""
    document = Document(
        name="Home",
        body=Text("x"),
        imports=(ManualImport("React", "preact/compat"),),
    )
    rendered = render_view(document, components, assets)
    with pytest.raises(ImportConflictError):
        build_view_module(document, rendered)


def test_invalid_component_name_override_is_rejected(
    components: ComponentTable, assets: AssetTable
) -> None:
    """An explicit name must still be a JavaScript identifier."""
    document = Document(body=Text("x"))
    rendered = render_view(document, components, assets)
    with pytest.raises(MalformedInputError, match="not a JavaScript identifier"):
        build_view_module(document, rendered, name="home-page")
