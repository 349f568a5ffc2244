"""
Render job description and the fixed defaults of the cheatsheet build.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_SOURCE = "doc.md"
DEFAULT_STYLESHEET = "pandoc.css"
DEFAULT_OUTPUT = "rust-cheatsheet.html"
DEFAULT_TITLE = "Rust Cheatsheet 🦀"
DEFAULT_ENGINE = "pandoc"


@dataclass
class RenderJob:
    """
    One markdown-to-HTML conversion.

    Hard line breaks, standalone output and resource embedding are always
    on; only the paths and the title vary.
    """
    source: Path
    stylesheet: Path
    output: Path
    title: str = DEFAULT_TITLE

    def __post_init__(self):
        self.source = Path(self.source)
        self.stylesheet = Path(self.stylesheet)
        self.output = Path(self.output)

    @property
    def resource_dirs(self) -> list[Path]:
        """Directories searched for relative resources, in order."""
        doc_dir = self.source.resolve().parent
        cwd = Path.cwd()
        return [doc_dir] if doc_dir == cwd else [doc_dir, cwd]

    def check_inputs(self) -> None:
        """
        Verify that the markdown source and the stylesheet exist.

        Raises:
            FileNotFoundError: If either input is missing.
        """
        if not self.source.is_file():
            raise FileNotFoundError(f"Markdown file not found: {self.source}")
        if not self.stylesheet.is_file():
            raise FileNotFoundError(f"Stylesheet not found: {self.stylesheet}")
