"""
Pytest configuration and shared fixtures.
"""

import shutil
import sys
from pathlib import Path
import pytest

# Make the package importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))

from docrender.core import DocumentRenderer
from docrender.job import RenderJob


# A 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "integration: mark as integration test")
    config.addinivalue_line("markers", "pandoc: mark as requiring the pandoc executable")


def pytest_collection_modifyitems(config, items):
    """Skip pandoc-marked tests when pandoc is not installed."""
    if shutil.which("pandoc"):
        return
    skip = pytest.mark.skip(reason="pandoc is not installed")
    for item in items:
        if "pandoc" in item.keywords:
            item.add_marker(skip)


# ============================================================================
# Content Fixtures
# ============================================================================


@pytest.fixture
def cheatsheet_content():
    """Sample cheatsheet markdown using hard line breaks."""
    return """# Variables

Bindings are immutable by default
Use `mut` to allow reassignment

## Example

```rust
let mut x = 5;
x = 6;
```

| Type | Size |
|------|------|
| i32  | 4    |
"""


@pytest.fixture
def stylesheet_content():
    """Sample stylesheet with a recognisable rule."""
    return "body { color: #123456; }\nh1 { font-weight: 700; }\n"


# ============================================================================
# Temporary File Fixtures
# ============================================================================


@pytest.fixture
def doc_file(tmp_path, cheatsheet_content):
    """Create a temporary markdown document."""
    path = tmp_path / "doc.md"
    path.write_text(cheatsheet_content, encoding="utf-8")
    return path


@pytest.fixture
def css_file(tmp_path, stylesheet_content):
    """Create a temporary stylesheet."""
    path = tmp_path / "pandoc.css"
    path.write_text(stylesheet_content, encoding="utf-8")
    return path


@pytest.fixture
def png_file(tmp_path):
    """Create a small PNG image beside the document."""
    path = tmp_path / "crab.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def out_dir(tmp_path):
    """Directory that receives rendered output."""
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def job(doc_file, css_file, out_dir):
    """A render job writing into out_dir."""
    return RenderJob(
        source=doc_file,
        stylesheet=css_file,
        output=out_dir / "rust-cheatsheet.html",
    )


# ============================================================================
# Renderer Fixtures
# ============================================================================


@pytest.fixture
def markdown_renderer():
    """Renderer using the in-process engine."""
    return DocumentRenderer(engine="markdown")


@pytest.fixture
def missing_pandoc_renderer():
    """Renderer pointed at a pandoc executable that does not exist."""
    return DocumentRenderer(engine="pandoc", pandoc_path="pandoc-does-not-exist-xyz")
