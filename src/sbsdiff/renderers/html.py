#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/renderers/html.py
"""HTML transliteration of colored side-by-side output.

The renderer takes the ANSI lines produced by
:class:`~sbsdiff.renderers.terminal.SideBySideRenderer` and rewrites the
color scheme's control sequences as ``<span>`` elements inside a ``<pre>``
block, so the terminal layout is preserved exactly. Content is
HTML-escaped before any tag is injected.
"""

from __future__ import annotations

import re
from html import escape
from io import StringIO
from typing import Iterable

from sbsdiff.classifier import ChangeCategory
from sbsdiff.colors import ColorScheme
from sbsdiff.constants import DEFAULT_HTML_TITLE, HTML_CATEGORY_COLORS


class AnsiHtmlRenderer:
    """Render ANSI-colored diff lines as a standalone HTML document.

    Each category start sequence becomes ``<span class="<category>">`` and
    the reset sequence closes the open span. A reset at the very start of a
    line, or one with no span open, is dropped.

    Parameters
    ----------
    scheme : ColorScheme
        The scheme the lines were colored with
    title : str, optional
        Document title
    description : str, optional
        Content of a ``<meta name="description">`` element

    Examples
    --------
    Render colored lines:
        >>> from sbsdiff.colors import FIXED_PALETTE
        >>> renderer = AnsiHtmlRenderer(FIXED_PALETTE)
        >>> renderer.transliterate_line("\\x1b[1;31mgone <\\x1b[0;0m")
        '<span class="removed">gone &lt;</span>'

    """

    def __init__(
        self,
        scheme: ColorScheme,
        title: str | None = None,
        description: str | None = None,
    ):
        """Initialize the HTML renderer."""
        self.scheme = scheme
        self.title = title or DEFAULT_HTML_TITLE
        self.description = description

        self._classes: dict[str, str] = {}
        for category in ChangeCategory:
            sequence = scheme.start(category)
            # A start sequence identical to the reset behaves as a reset
            if sequence and sequence != scheme.reset:
                self._classes.setdefault(sequence, category.value)

        sequences = sorted({*self._classes, scheme.reset} - {""}, key=len, reverse=True)
        self._pattern = re.compile("(" + "|".join(re.escape(s) for s in sequences) + ")") if sequences else None

    def render(self, lines: Iterable[str]) -> str:
        """Render colored lines to an HTML string.

        Parameters
        ----------
        lines : iterable of str
            ANSI-colored lines without terminators

        Returns
        -------
        str
            Complete HTML document

        """
        output = StringIO()
        self._write_html_prefix(output)
        for line in lines:
            output.write(self.transliterate_line(line))
            output.write("\n")
        self._write_html_suffix(output)
        return output.getvalue()

    def transliterate_line(self, line: str) -> str:
        """Convert one colored line to HTML markup."""
        text = escape(line, quote=False)
        if self._pattern is None:
            return text

        parts: list[str] = []
        span_open = False
        for token in self._pattern.split(text):
            if not token:
                continue
            if token == self.scheme.reset:
                # Leading resets and resets with nothing open are dropped
                if span_open:
                    parts.append("</span>")
                    span_open = False
            elif token in self._classes:
                if span_open:
                    parts.append("</span>")
                parts.append(f'<span class="{self._classes[token]}">')
                span_open = True
            else:
                parts.append(token)

        if span_open:
            parts.append("</span>")
        return "".join(parts)

    def _write_html_prefix(self, output: StringIO) -> None:
        """Write the static HTML prefix."""
        output.write("<!DOCTYPE html>\n")
        output.write("<html lang='en'>\n")
        output.write("<head>\n")
        output.write("  <meta charset='UTF-8'>\n")
        output.write(f"  <title>{escape(self.title)}</title>\n")
        if self.description:
            output.write(f"  <meta name='description' content=\"{escape(self.description)}\">\n")
        output.write("  <style>\n")
        output.write(self._get_css())
        output.write("  </style>\n")
        output.write("</head>\n")
        output.write("<body>\n")
        output.write("<pre>\n")

    def _write_html_suffix(self, output: StringIO) -> None:
        """Write the closing HTML tags."""
        output.write("</pre>\n")
        output.write("</body>\n")
        output.write("</html>\n")

    def _get_css(self) -> str:
        """Get one CSS rule per change category."""
        return "".join(
            f"    .{category.value} {{ color: {HTML_CATEGORY_COLORS[category.value]}; }}\n" for category in ChangeCategory
        )
