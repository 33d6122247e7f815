"""Render orchestration."""

from .pipeline import GeomRenderer, add_group, get_renderer, preview, render

__all__ = ["GeomRenderer", "add_group", "get_renderer", "preview", "render"]
