"""Render proto documents and route indexes into React JSX modules."""

from .models import EffectiveTag, ImportDirective, ImportOrigin, RenderedView, ResolvedAsset
from .module_builder import ViewModuleBuilder, build_view_module
from .resolver import ImportCollector, merge_properties, resolve_asset, resolve_component
from .router_renderer import RouterRenderer, component_identifier, render_router
from .view_renderer import ViewRenderer, render_view

__all__ = [
    "EffectiveTag",
    "ImportCollector",
    "ImportDirective",
    "ImportOrigin",
    "RenderedView",
    "ResolvedAsset",
    "RouterRenderer",
    "ViewModuleBuilder",
    "ViewRenderer",
    "build_view_module",
    "component_identifier",
    "merge_properties",
    "render_router",
    "render_view",
    "resolve_asset",
    "resolve_component",
]
