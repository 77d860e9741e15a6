"""Minimal markdown renderer — escapes HTML and wraps paragraphs."""

import html
import re

from qa_moderation.application.interfaces import MarkdownRenderer

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


class EscapingRenderer(MarkdownRenderer):
    """Safe stand-in for the real markdown pipeline.

    Every blank-line separated block becomes one ``<p>``; single newlines
    become ``<br>``. No markdown syntax is interpreted.
    """

    def render(self, markdown: str) -> str:
        blocks = [b.strip() for b in _PARAGRAPH_SPLIT.split(markdown.strip()) if b.strip()]
        return "\n".join(
            "<p>" + html.escape(block).replace("\n", "<br>\n") + "</p>" for block in blocks
        )
