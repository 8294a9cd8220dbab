"""
Description renderers.

Descriptions are kept as plain text unless Markdown rendering is enabled, in
which case they go through the ``markdown`` package and ``{@link ...}``
references are rewritten to in-page anchors.
"""

import markdown

from .utils import process_internal_links


class PlainTextRenderer:
    def render(self, text: str) -> str:
        return text or ""


class MarkdownRenderer:
    """Markdown to HTML, then internal links. One ``markdown.Markdown`` instance, reset per call."""

    def __init__(self, extensions=None):
        self.md = markdown.Markdown(extensions=extensions if extensions is not None else ["tables", "fenced_code"])

    def render(self, text: str) -> str:
        if not text:
            return ""
        self.md.reset()
        return process_internal_links(self.md.convert(text))


def get_renderer(render_markdown: bool = False):
    return MarkdownRenderer() if render_markdown else PlainTextRenderer()
