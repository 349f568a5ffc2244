"""
Resource embedding helpers.

Resolves resources referenced from a document (images, scripts,
stylesheets, fonts) and turns them into data: URIs so the rendered page
carries everything it needs.
"""

import base64
import mimetypes
import re
from pathlib import Path
from urllib.parse import unquote, urljoin, urlparse

from .errors import ConversionError

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
FETCH_TIMEOUT = 30

CSS_URL_PATTERN = re.compile(r"""url\(\s*(['"]?)([^'")]+)\1\s*\)""", re.IGNORECASE)
CSS_IMPORT_PATTERN = re.compile(r"""@import\s+(['"])([^'"]+)\1""", re.IGNORECASE)

mimetypes.add_type("image/svg+xml", ".svg")
mimetypes.add_type("font/woff2", ".woff2")
mimetypes.add_type("font/woff", ".woff")


def is_embedded(ref: str) -> bool:
    """True for references that need no fetching (data URIs, fragments, empty)."""
    ref = ref.strip()
    return not ref or ref.startswith(("data:", "#", "about:"))


def is_remote(ref: str) -> bool:
    parsed = urlparse(ref)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def fetch(ref: str, search_dirs: list[Path]) -> tuple[str, bytes]:
    """
    Load a referenced resource.

    Args:
        ref: URL or path as written in the document.
        search_dirs: Directories tried, in order, for relative paths.

    Returns:
        (mime type, raw bytes)

    Raises:
        ConversionError: If the resource cannot be fetched.
    """
    if is_remote(ref):
        return _fetch_remote(ref)

    parsed = urlparse(ref)
    if parsed.scheme not in ("", "file"):
        raise ConversionError(f"Could not fetch resource {ref}: unsupported scheme {parsed.scheme}")

    path = Path(unquote(parsed.path))
    candidates = [path] if path.is_absolute() else [d / path for d in search_dirs]
    for candidate in candidates:
        if candidate.is_file():
            return _guess_type(candidate.name), candidate.read_bytes()

    raise ConversionError(f"Could not fetch resource {ref}: file not found")


def to_data_uri(mime: str, content: bytes) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def decode_css(content: bytes, name) -> str:
    """
    Decode a stylesheet as UTF-8, tolerating a BOM.

    Raises:
        ConversionError: If the stylesheet is not valid UTF-8.
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ConversionError(f"{name} is not valid UTF-8: {e}")


def embed(ref: str, search_dirs: list[Path], base_url: str = None) -> str:
    """
    Return a data: URI for ref, or ref itself when it is already inline.

    Args:
        ref: URL or path as written in the document or stylesheet.
        search_dirs: Directories tried, in order, for relative paths.
        base_url: URL of the remote stylesheet ref appeared in, if any.
            Relative refs resolve against it instead of the local dirs.
    """
    ref = ref.strip()
    if is_embedded(ref):
        return ref
    if base_url and not is_remote(ref):
        ref = urljoin(base_url, ref)

    mime, content = fetch(ref, search_dirs)
    if mime == "text/css":
        # Stylesheets pulled in this way may reference further resources.
        css = decode_css(content, ref)
        if is_remote(ref):
            css = inline_css_urls(css, search_dirs, base_url=ref)
        else:
            css = inline_css_urls(css, _css_base_dirs(ref, search_dirs))
        content = css.encode("utf-8")
    return to_data_uri(mime, content)


def inline_css_urls(css: str, search_dirs: list[Path], base_url: str = None) -> str:
    """Replace every @import and url(...) reference in a stylesheet with a data: URI."""

    def _replace_import(match):
        return f'@import url("{embed(match.group(2), search_dirs, base_url)}")'

    def _replace_url(match):
        ref = match.group(2).strip()
        if is_embedded(ref):
            return match.group(0)
        return f'url("{embed(ref, search_dirs, base_url)}")'

    css = CSS_IMPORT_PATTERN.sub(_replace_import, css)
    return CSS_URL_PATTERN.sub(_replace_url, css)


def parse_srcset(value: str) -> list[tuple[str, str]]:
    """
    Split a srcset attribute into (url, descriptor) pairs.

    URLs run to the next whitespace, so commas inside data: URIs survive.
    """
    candidates = []
    pos, end = 0, len(value)
    while pos < end:
        while pos < end and (value[pos].isspace() or value[pos] == ","):
            pos += 1
        if pos >= end:
            break
        start = pos
        while pos < end and not value[pos].isspace():
            pos += 1
        url = value[start:pos]
        descriptor = ""
        if url.endswith(","):
            url = url.rstrip(",")
        else:
            comma = value.find(",", pos)
            comma = end if comma == -1 else comma
            descriptor = value[pos:comma].strip()
            pos = comma + 1
        candidates.append((url, descriptor))
    return candidates


def embed_srcset(value: str, search_dirs: list[Path]) -> str:
    parts = []
    for url, descriptor in parse_srcset(value):
        uri = embed(url, search_dirs)
        parts.append(f"{uri} {descriptor}" if descriptor else uri)
    return ", ".join(parts)


def _css_base_dirs(ref: str, search_dirs: list[Path]) -> list[Path]:
    """A local stylesheet's own directory comes first when resolving its urls."""
    path = Path(unquote(urlparse(ref).path))
    if path.is_absolute():
        return [path.parent] + search_dirs
    return [(d / path).parent for d in search_dirs if (d / path).is_file()] + search_dirs


def _guess_type(name: str) -> str:
    mime, _ = mimetypes.guess_type(name)
    return mime or "application/octet-stream"


def _fetch_remote(url: str) -> tuple[str, bytes]:
    try:
        import requests
    except ImportError:
        raise RuntimeError("requests is not installed. Run: pip install requests")

    try:
        response = requests.get(
            url,
            headers={"User-Agent": USER_AGENT},
            timeout=FETCH_TIMEOUT,
            allow_redirects=True,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise ConversionError(f"Could not fetch resource {url}: {e}")

    content_type = response.headers.get("Content-Type", "")
    mime = content_type.split(";")[0].strip() or _guess_type(urlparse(url).path)
    return mime, response.content
