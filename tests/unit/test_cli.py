"""
Unit tests for the command-line interface.
"""

from bs4 import BeautifulSoup

from docrender import cli
from docrender.converters import pandoc_converter
from docrender.job import DEFAULT_OUTPUT, DEFAULT_SOURCE, DEFAULT_STYLESHEET, DEFAULT_TITLE


class TestDefaults:
    """The bare invocation reproduces the original cheatsheet build."""

    def test_parser_defaults(self):
        args = cli.build_parser().parse_args([])

        assert args.source == DEFAULT_SOURCE == "doc.md"
        assert args.css == DEFAULT_STYLESHEET == "pandoc.css"
        assert args.output == DEFAULT_OUTPUT == "rust-cheatsheet.html"
        assert args.title == DEFAULT_TITLE == "Rust Cheatsheet 🦀"
        assert args.engine == "pandoc"

    def test_bare_invocation_in_project_dir(self, tmp_path, doc_file, css_file, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert cli.main(["--engine", "markdown"]) == 0

        soup = BeautifulSoup((tmp_path / "rust-cheatsheet.html").read_text(encoding="utf-8"), "html.parser")
        assert soup.title.string == "Rust Cheatsheet 🦀"


class TestMain:
    """Tests for exit statuses and output."""

    def test_success(self, doc_file, css_file, out_dir, capsys):
        out = out_dir / "notes.html"

        code = cli.main([str(doc_file), "-c", str(css_file), "-o", str(out),
                         "--title", "Notes", "--engine", "markdown"])

        assert code == 0
        assert out.is_file()
        assert f"Done: {out}" in capsys.readouterr().out

    def test_missing_input(self, css_file, out_dir, capsys):
        out = out_dir / "notes.html"

        code = cli.main([str(out_dir / "absent.md"), "-c", str(css_file), "-o", str(out),
                         "--engine", "markdown"])

        assert code == 1
        assert not out.exists()
        assert "[ERROR]" in capsys.readouterr().err

    def test_missing_tool(self, doc_file, css_file, out_dir, capsys):
        out = out_dir / "notes.html"

        code = cli.main([str(doc_file), "-c", str(css_file), "-o", str(out),
                         "--pandoc", "pandoc-does-not-exist-xyz"])

        assert code == 127
        assert not out.exists()
        assert "pandoc not found" in capsys.readouterr().err

    def test_conversion_error(self, doc_file, css_file, out_dir):
        doc_file.write_text("![gone](missing.png)\n", encoding="utf-8")

        code = cli.main([str(doc_file), "-c", str(css_file), "-o", str(out_dir / "x.html"),
                         "--engine", "markdown"])

        assert code == 1
        assert list(out_dir.iterdir()) == []

    def test_stylesheet_not_utf8(self, doc_file, tmp_path, out_dir, capsys):
        css = tmp_path / "latin1.css"
        css.write_bytes("p::after { content: 'café'; }".encode("latin-1"))
        out = out_dir / "notes.html"

        code = cli.main([str(doc_file), "-c", str(css), "-o", str(out), "--engine", "markdown"])

        assert code == 1
        assert not out.exists()
        err = capsys.readouterr().err
        assert "[ERROR]" in err
        assert "not valid UTF-8" in err

    def test_engines_listing(self, monkeypatch, capsys):
        monkeypatch.setattr(pandoc_converter.shutil, "which", lambda name: None)

        assert cli.main(["--engines"]) == 0

        out = capsys.readouterr().out
        assert "pandoc     not available" in out
        assert "markdown   Python-Markdown (in-process)" in out
