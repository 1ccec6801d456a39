from __future__ import annotations

import html
import sys
from pathlib import Path
from typing import Union

from .content import convert_markdown, title_from_filename
from .errors import OutputWriteError
from .models import PageLink, SkippedDocument, SourceDocument, StyleAsset
from .render import Template, write_text

INDEX_FILE = "index.html"
MISSING_TITLE_POLICIES = ("filename", "skip")

PageResult = Union[PageLink, SkippedDocument]


def skip(document: SourceDocument, reason: str) -> SkippedDocument:
    print(f"warning: skipping {document.path}: {reason}", file=sys.stderr)
    return SkippedDocument(path=document.path, reason=reason)


def build_page(
    document: SourceDocument,
    template: Template,
    style: StyleAsset,
    output_dir: Path,
    base_url: str = "./",
    site_name: str = "",
    highlight_style: str = "",
    missing_title: str = "filename",
    highlight: bool = True,
) -> PageResult:
    """Convert and write one document.

    Returns the index link for the written page, or the reason the document
    was left out. Template problems are not caught here: they affect every
    page and abort the build.
    """
    if document.output_name == INDEX_FILE:
        return skip(document, "output name collides with the index page")
    try:
        text = document.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return skip(document, f"could not read source: {exc}")

    conversion = convert_markdown(text, highlight=highlight)
    title = conversion.title
    if title is None:
        if missing_title == "skip":
            return skip(document, "no level-one heading to take a title from")
        title = title_from_filename(document.name)
        print(f"warning: {document.path} has no level-one heading, using title {title!r}", file=sys.stderr)
    document.title = title

    page_title = f"{title} | {site_name}" if site_name else title
    html_doc = template.render(
        title=html.escape(page_title),
        style=style.text,
        highlight_style=highlight_style,
        content=conversion.html,
    )

    out_path = output_dir / document.output_name
    try:
        write_text(out_path, html_doc)
    except OSError as exc:
        return skip(document, f"could not write {out_path}: {exc}")
    print(f"Wrote {out_path}")
    return PageLink(title=title, url=f"{base_url}{document.output_name}")


def build_link_list(pages: list[PageLink]) -> str:
    items = []
    for page in pages:
        items.append(
            f'<div class="row-item"><a href="{html.escape(page.url)}">{html.escape(page.title)}</a></div>'
        )
    return "\n".join(items)


def build_index(template: Template, output_dir: Path, pages: list[PageLink], site_name: str = "") -> Path:
    html_doc = template.render(title=html.escape(site_name), links=build_link_list(pages))
    out_path = output_dir / INDEX_FILE
    try:
        write_text(out_path, html_doc)
    except OSError as exc:
        raise OutputWriteError("Index page could not be written", out_path, exc) from exc
    print(f"Wrote {out_path}")
    return out_path
