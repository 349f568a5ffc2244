"""
Markdown-to-HTML Converter (pandoc)

Shells out to pandoc with the cheatsheet's fixed flags: markdown with
hard line breaks in, standalone HTML out, every resource embedded, the
title taken from metadata and the stylesheet linked in.
"""

import os
import re
import shutil
import subprocess

from ..errors import ConversionError, ToolNotFoundError
from ..job import RenderJob

VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)+)")


class PandocConverter:
    """Converts markdown to self-contained HTML by invoking pandoc."""

    NAME = "pandoc"
    EXECUTABLE = "pandoc"
    INPUT_FORMAT = "markdown+hard_line_breaks"
    # --self-contained was deprecated in favour of --embed-resources in 2.19
    EMBED_RESOURCES_SINCE = (2, 19)
    VERSION_TIMEOUT = 30

    def __init__(self, executable: str = None):
        self.executable = executable or self.EXECUTABLE
        self._version = None

    def locate(self) -> str:
        """
        Resolve the pandoc executable.

        Raises:
            ToolNotFoundError: If pandoc is not installed or not on PATH.
        """
        path = shutil.which(self.executable)
        if path is None:
            raise ToolNotFoundError(
                f"pandoc not found ({self.executable}). "
                f"Install it from https://pandoc.org/installing.html "
                f"or use --engine markdown"
            )
        return path

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def describe(self) -> str:
        version = ".".join(str(n) for n in self.version()) or "unknown version"
        return f"pandoc {version}"

    def version(self) -> tuple:
        """Return pandoc's version as a tuple of ints, () if it can't be read."""
        if self._version is None:
            executable = self.locate()
            try:
                result = subprocess.run(
                    [executable, "--version"],
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self.VERSION_TIMEOUT,
                )
            except subprocess.TimeoutExpired:
                self._version = ()
                return self._version
            except OSError as e:
                raise ToolNotFoundError(f"Cannot run {executable}: {e}")
            self._version = parse_version(result.stdout)
        return self._version

    def build_command(self, job: RenderJob, out_path) -> list[str]:
        """Assemble the pandoc argument list for a job."""
        if self.version() >= self.EMBED_RESOURCES_SINCE:
            embed_flag = "--embed-resources"
        else:
            embed_flag = "--self-contained"

        resource_path = os.pathsep.join(str(d) for d in job.resource_dirs)

        return [
            self.locate(),
            f"--from={self.INPUT_FORMAT}",
            "--to=html",
            "--standalone",
            embed_flag,
            "--metadata", f"title={job.title}",
            "--css", str(job.stylesheet.resolve()),
            "--resource-path", resource_path,
            "--output", str(out_path),
            str(job.source),
        ]

    def convert(self, job: RenderJob, out_path) -> None:
        """
        Run pandoc for a job, writing the page to out_path.

        Raises:
            ToolNotFoundError: If pandoc cannot be found or started.
            ConversionError: If pandoc exits with a nonzero status.
        """
        cmd = self.build_command(job, out_path)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError:
            raise ToolNotFoundError(f"pandoc not found: {cmd[0]}")

        stderr = result.stderr.strip()
        if result.returncode != 0:
            raise ConversionError(
                f"pandoc exited with status {result.returncode}: {stderr or 'no diagnostics'}",
                returncode=result.returncode,
            )

        for line in stderr.splitlines():
            print(f"[WARN] {line}")


def parse_version(output: str) -> tuple:
    """Extract (major, minor, ...) from the first line of `pandoc --version`."""
    first_line = output.strip().splitlines()[0] if output.strip() else ""
    match = VERSION_PATTERN.search(first_line)
    if not match:
        return ()
    return tuple(int(part) for part in match.group(1).split("."))
