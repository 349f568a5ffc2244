from .pandoc_converter import PandocConverter
from .markdown_converter import MarkdownConverter

__all__ = ["PandocConverter", "MarkdownConverter"]
