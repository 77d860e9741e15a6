"""Markdown renderer port — rendering and sanitization live outside this service."""

from abc import ABC, abstractmethod


class MarkdownRenderer(ABC):

    @abstractmethod
    def render(self, markdown: str) -> str:
        """Render markdown source to safe HTML."""
        ...
