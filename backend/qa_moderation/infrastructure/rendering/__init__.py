from .escaping_renderer import EscapingRenderer

__all__ = ["EscapingRenderer"]
