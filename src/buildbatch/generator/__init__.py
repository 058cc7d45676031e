from __future__ import annotations

from .main import render_script

__all__ = [
    "render_script",
]
