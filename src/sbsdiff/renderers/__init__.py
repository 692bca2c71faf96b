#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/renderers/__init__.py
"""Renderers for side-by-side diff output.

Available Renderers
-------------------
- SideBySideRenderer: ANSI-colored terminal lines, with optional word highlighting
- AnsiHtmlRenderer: Transliterates colored lines into a standalone HTML page

Examples
--------
Render colored lines as HTML:
    >>> from sbsdiff.colors import FIXED_PALETTE
    >>> from sbsdiff.renderers import AnsiHtmlRenderer
    >>> html = AnsiHtmlRenderer(FIXED_PALETTE).render(["\\x1b[1;34m          > added\\x1b[0;0m"])

"""

from sbsdiff.renderers.html import AnsiHtmlRenderer
from sbsdiff.renderers.terminal import SideBySideRenderer

__all__ = [
    "AnsiHtmlRenderer",
    "SideBySideRenderer",
]
