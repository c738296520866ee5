"""Renderers for the segment row."""

from updir.render.terminal import LineRenderer

__all__ = ["LineRenderer"]
