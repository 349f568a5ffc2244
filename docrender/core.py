"""
docrender Core Engine

Picks a conversion engine and runs one render job atomically: the engine
writes into a temporary file beside the target, which replaces the target
only once conversion has succeeded.
"""

import os
import tempfile

from .converters.markdown_converter import MarkdownConverter
from .converters.pandoc_converter import PandocConverter
from .errors import OutputWriteError
from .job import DEFAULT_ENGINE, RenderJob

ENGINES = ("pandoc", "markdown", "auto")


class DocumentRenderer:
    """
    Main rendering engine.

    Accepts a RenderJob and produces one standalone, self-contained HTML
    file with the engine chosen at construction time.
    """

    def __init__(self, engine: str = DEFAULT_ENGINE, pandoc_path: str = None):
        if engine not in ENGINES:
            raise ValueError(f"Unknown engine: {engine} (choose from {', '.join(ENGINES)})")
        self.engine = engine
        self.pandoc = PandocConverter(pandoc_path)
        self.markdown = MarkdownConverter()

    @property
    def converter(self):
        """The converter this renderer dispatches to."""
        if self.engine == "pandoc":
            return self.pandoc
        if self.engine == "markdown":
            return self.markdown
        return self.pandoc if self.pandoc.is_available() else self.markdown

    def render(self, job: RenderJob) -> str:
        """
        Render a job to its output file.

        Args:
            job: Source, stylesheet, output path and title.

        Returns:
            Path of the written HTML file.

        Raises:
            FileNotFoundError: If the markdown source or stylesheet is missing.
            ToolNotFoundError: If the selected external converter is absent.
            ConversionError: If the converter cannot produce the document.
            OutputWriteError: If the output cannot be written.
        """
        job.check_inputs()
        converter = self.converter

        tag = "PANDOC" if converter is self.pandoc else "MD"
        print(f"[{tag}] Rendering: {job.source} -> {job.output}")

        out_path = str(job.output)
        tmp_path = _reserve_temp(out_path)
        try:
            converter.convert(job, tmp_path)
        except BaseException:
            _discard(tmp_path)
            raise

        try:
            os.replace(tmp_path, out_path)
        except OSError as e:
            _discard(tmp_path)
            raise OutputWriteError(f"Cannot write {out_path}: {e}")

        print(f"[SAVED] {out_path}")
        return out_path

    def available_engines(self) -> dict:
        """Map each concrete engine name to a description, or None when missing."""
        engines = {}
        for converter in (self.pandoc, self.markdown):
            engines[converter.NAME] = converter.describe() if converter.is_available() else None
        return engines


def _reserve_temp(out_path: str) -> str:
    """Create an empty temporary .html file in the output's directory."""
    out_dir = os.path.dirname(os.path.abspath(out_path))
    base = os.path.basename(out_path)
    try:
        os.makedirs(out_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{base}.", suffix=".html", dir=out_dir)
    except OSError as e:
        raise OutputWriteError(f"Cannot write {out_path}: {e}")
    os.close(fd)
    # mkstemp creates 0600; give the final file the usual umask-derived mode
    umask = os.umask(0)
    os.umask(umask)
    os.chmod(tmp_path, 0o666 & ~umask)
    return tmp_path


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
