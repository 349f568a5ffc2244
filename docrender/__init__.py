"""
docrender - Standalone Markdown-to-HTML Renderer

Renders a markdown document and a CSS stylesheet into one self-contained
HTML file with a fixed title. Hard line breaks are honored and every
referenced resource is embedded, so the output has no external
dependencies.
"""

__version__ = "1.0.0"
