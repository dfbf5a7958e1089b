"""Rendering: cell surface, frame drawing and repaint scheduling."""

from .coordinator import RenderCoordinator
from .frame import Frame, draw_frame
from .surface import AnsiSurface

__all__ = [
    "AnsiSurface",
    "Frame",
    "RenderCoordinator",
    "draw_frame",
]
