"""Tests for page and index rendering."""

from pathlib import Path

import pytest
from mdblog.errors import OutputWriteError, TemplateError
from mdblog.models import PageLink, SkippedDocument, SourceDocument, StyleAsset
from mdblog.pages import build_index, build_link_list, build_page
from mdblog.render import load_index_template, load_page_template
from mdblog.sources import collect_sources, modified_time

STYLE = StyleAsset(text="body{color:red}")


def discover(source_dir: Path) -> list[SourceDocument]:
    return collect_sources(source_dir, modified_time)


class TestBuildPage:
    """Tests for build_page."""

    def test__writes_page_and_returns_link(self, source_dir: Path, output_dir: Path, write_post) -> None:
        """Render the fragment and style into the page template."""
        write_post("hello.md", "# Hello\nWorld")
        [document] = discover(source_dir)

        result = build_page(document, load_page_template(), STYLE, output_dir)

        assert result == PageLink(title="Hello", url="./hello.html")
        assert document.title == "Hello"
        page = (output_dir / "hello.html").read_text(encoding="utf-8")
        assert "<h1>Hello</h1>" in page
        assert "<style>body{color:red}" in page
        assert page.index("<style>") < page.index("<h1>Hello</h1>")

    def test__base_url_prefixes_link(self, source_dir: Path, output_dir: Path, write_post) -> None:
        """Links are the base URL followed by the output file name."""
        write_post("post.md", "# Post")
        [document] = discover(source_dir)

        result = build_page(document, load_page_template(), STYLE, output_dir, base_url="/blog/")

        assert result == PageLink(title="Post", url="/blog/post.html")

    def test__site_name_in_page_title(self, source_dir: Path, output_dir: Path, write_post) -> None:
        """The HTML title combines post title and site name."""
        write_post("post.md", "# Fish & Chips")
        [document] = discover(source_dir)

        build_page(document, load_page_template(), STYLE, output_dir, site_name="Diary")

        page = (output_dir / "post.html").read_text(encoding="utf-8")
        assert "<title>Fish &amp; Chips | Diary</title>" in page

    def test__overwrites_existing_file(self, source_dir: Path, output_dir: Path, write_post) -> None:
        """An existing page with the same name is replaced."""
        write_post("post.md", "# New")
        (output_dir / "post.html").write_text("stale")
        [document] = discover(source_dir)

        build_page(document, load_page_template(), STYLE, output_dir)

        assert "<h1>New</h1>" in (output_dir / "post.html").read_text(encoding="utf-8")

    def test__no_h1__uses_file_name(self, source_dir: Path, output_dir: Path, write_post, capsys) -> None:
        """Without a level-one heading the title comes from the file name."""
        write_post("my-first_post.md", "Just text.")
        [document] = discover(source_dir)

        result = build_page(document, load_page_template(), STYLE, output_dir)

        assert result == PageLink(title="my first post", url="./my-first_post.html")
        assert (output_dir / "my-first_post.html").exists()
        assert "no level-one heading" in capsys.readouterr().err

    def test__no_h1__skip_policy(self, source_dir: Path, output_dir: Path, write_post) -> None:
        """The skip policy leaves the document out entirely."""
        write_post("untitled.md", "Just text.")
        [document] = discover(source_dir)

        result = build_page(document, load_page_template(), STYLE, output_dir, missing_title="skip")

        assert isinstance(result, SkippedDocument)
        assert result.path == document.path
        assert not (output_dir / "untitled.html").exists()
        assert document.title is None

    def test__unreadable_source__skipped(self, source_dir: Path, output_dir: Path, capsys) -> None:
        """A source that cannot be decoded is skipped with a warning."""
        (source_dir / "binary.md").write_bytes(b"# Bad \xff\xfe bytes")
        [document] = discover(source_dir)

        result = build_page(document, load_page_template(), STYLE, output_dir)

        assert isinstance(result, SkippedDocument)
        assert "could not read source" in result.reason
        assert "binary.md" in capsys.readouterr().err

    def test__write_failure__skipped(self, source_dir: Path, output_dir: Path, write_post) -> None:
        """A page that cannot be written is skipped, not fatal."""
        write_post("blocked.md", "# Blocked")
        (output_dir / "blocked.html").mkdir()
        [document] = discover(source_dir)

        result = build_page(document, load_page_template(), STYLE, output_dir)

        assert isinstance(result, SkippedDocument)
        assert "could not write" in result.reason

    def test__index_named_source__skipped(self, source_dir: Path, output_dir: Path, write_post) -> None:
        """A post that would be written over the index page is left out."""
        write_post("index.md", "# Home post")
        [document] = discover(source_dir)

        result = build_page(document, load_page_template(), STYLE, output_dir)

        assert isinstance(result, SkippedDocument)
        assert "collides with the index page" in result.reason
        assert not (output_dir / "index.html").exists()

    def test__template_failure__raises(self, source_dir: Path, output_dir: Path, write_post) -> None:
        """Template problems are fatal and propagate."""
        write_post("post.md", "# Post")
        [document] = discover(source_dir)
        template = load_page_template()
        broken = type(template)(name=template.name, text=template.text, required=template.required | {"footer"})

        with pytest.raises(TemplateError):
            build_page(document, broken, STYLE, output_dir)


class TestBuildIndex:
    """Tests for build_index."""

    def test__lists_links_in_order(self, output_dir: Path) -> None:
        """Every link appears once, in the given order."""
        pages = [
            PageLink(title="First", url="./first.html"),
            PageLink(title="Second", url="./second.html"),
        ]

        path = build_index(load_index_template(), output_dir, pages)

        assert path == output_dir / "index.html"
        index = path.read_text(encoding="utf-8")
        assert index.count("<a href=") == 2
        assert index.index('<a href="./first.html">First</a>') < index.index('<a href="./second.html">Second</a>')

    def test__no_pages__empty_list(self, output_dir: Path) -> None:
        """An index is still written when nothing was rendered."""
        path = build_index(load_index_template(), output_dir, [])

        assert "<a href=" not in path.read_text(encoding="utf-8")

    def test__escapes_titles(self) -> None:
        """Titles and URLs are HTML escaped."""
        html = build_link_list([PageLink(title="<b>Bold</b> & co", url='./a"b.html')])

        assert html == '<div class="row-item"><a href="./a&quot;b.html">&lt;b&gt;Bold&lt;/b&gt; &amp; co</a></div>'

    def test__write_failure__raises(self, output_dir: Path) -> None:
        """Failing to write the index is fatal."""
        (output_dir / "index.html").mkdir()

        with pytest.raises(OutputWriteError):
            build_index(load_index_template(), output_dir, [])
