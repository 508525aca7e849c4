"""Markdown rendering for sourcedocs."""

from render.markdown import RenderError, RenderOptions, render

__all__ = ["RenderError", "RenderOptions", "render"]
