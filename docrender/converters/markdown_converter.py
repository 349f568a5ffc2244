"""
Markdown-to-HTML Converter (in-process)

Renders markdown with Python-Markdown and wraps it in a standalone page
laid out like pandoc's default HTML template. Single newlines inside a
paragraph become <br> and every referenced resource is embedded.
"""

import html

from .. import resources
from ..errors import ConversionError, OutputWriteError
from ..job import RenderJob

EXTENSIONS = ["extra", "nl2br", "sane_lists", "toc"]

# (tag, attribute) pairs holding a single resource reference
EMBEDDED_ATTRIBUTES = [
    ("img", "src"),
    ("script", "src"),
    ("audio", "src"),
    ("video", "src"),
    ("video", "poster"),
    ("source", "src"),
    ("track", "src"),
    ("embed", "src"),
    ("iframe", "src"),
    ("object", "data"),
    ("input", "src"),
]

SRCSET_TAGS = ["img", "source"]

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="">
<head>
  <meta charset="utf-8" />
  <meta name="generator" content="docrender" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0, user-scalable=yes" />
  <title>{title}</title>
  <style>
{css}
  </style>
</head>
<body>
<header id="title-block-header">
<h1 class="title">{title}</h1>
</header>
{body}
</body>
</html>
"""


class MarkdownConverter:
    """Converts markdown to a self-contained HTML page without external tools."""

    NAME = "markdown"

    @staticmethod
    def is_available() -> bool:
        try:
            import markdown  # noqa: F401
            import bs4  # noqa: F401
        except ImportError:
            return False
        return True

    def describe(self) -> str:
        return "Python-Markdown (in-process)"

    def convert(self, job: RenderJob, out_path) -> None:
        """Render job.source and write the finished page to out_path."""
        try:
            text = job.source.read_bytes().decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ConversionError(f"{job.source} is not valid UTF-8: {e}")

        search_dirs = job.resource_dirs
        body = embed_resources(render_body(text), search_dirs)

        css = resources.decode_css(job.stylesheet.read_bytes(), job.stylesheet)
        css_dirs = [job.stylesheet.resolve().parent] + search_dirs
        css = resources.inline_css_urls(css, css_dirs)

        page = PAGE_TEMPLATE.format(
            title=html.escape(job.title, quote=False),
            css=css.replace("</style", "<\\/style").rstrip("\n"),
            body=body,
        )

        try:
            with open(out_path, "w", encoding="utf-8", newline="\n") as f:
                f.write(page)
        except OSError as e:
            raise OutputWriteError(f"Cannot write {out_path}: {e}")


def render_body(text: str) -> str:
    """Convert markdown text to an HTML fragment with hard line breaks."""
    try:
        import markdown
    except ImportError:
        raise RuntimeError("markdown is not installed. Run: pip install markdown")

    return markdown.markdown(text, extensions=EXTENSIONS, output_format="html")


def embed_resources(fragment: str, search_dirs) -> str:
    """Swap every external src/href in an HTML fragment for a data: URI."""
    try:
        from bs4 import BeautifulSoup
    except ImportError:
        raise RuntimeError("beautifulsoup4 is not installed. Run: pip install beautifulsoup4")

    soup = BeautifulSoup(fragment, "html.parser")
    changed = False

    for tag_name, attr in EMBEDDED_ATTRIBUTES:
        for tag in soup.find_all(tag_name, attrs={attr: True}):
            if resources.is_embedded(tag[attr]):
                continue
            tag[attr] = resources.embed(tag[attr], search_dirs)
            changed = True

    for tag in soup.find_all(SRCSET_TAGS, srcset=True):
        srcset = resources.embed_srcset(tag["srcset"], search_dirs)
        if srcset != tag["srcset"]:
            tag["srcset"] = srcset
            changed = True

    for link in soup.find_all("link", href=True):
        rel = [r.lower() for r in link.get("rel", [])]
        if "stylesheet" not in rel or resources.is_embedded(link["href"]):
            continue
        link["href"] = resources.embed(link["href"], search_dirs)
        changed = True

    # Leave untouched fragments byte-for-byte as Python-Markdown produced them.
    return str(soup) if changed else fragment
