"""
Exceptions raised while rendering a document.
"""


class RenderError(Exception):
    """Base class for rendering failures."""

    exit_code = 1


class ToolNotFoundError(RenderError):
    """Raised when the external converter executable cannot be found."""

    exit_code = 127


class ConversionError(RenderError):
    """Raised when the converter rejects the input or cannot embed a resource."""

    def __init__(self, message: str, returncode: int = None):
        super().__init__(message)
        self.returncode = returncode

    @property
    def exit_code(self) -> int:
        return self.returncode or 1


class OutputWriteError(RenderError):
    """Raised when the rendered document cannot be written to disk."""
    pass
