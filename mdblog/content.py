from __future__ import annotations

import html as html_lib
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import markdown
from markdown.extensions import Extension
from markdown.extensions.toc import render_inner_html, strip_tags
from markdown.treeprocessors import Treeprocessor

WHITESPACE_RE = re.compile(r"\s+")
NAME_SEPARATOR_RE = re.compile(r"[-_\s]+")
HIGHLIGHT_CSS_CLASS = "codehilite"


@dataclass(frozen=True)
class Conversion:
    html: str
    title: Optional[str]


class TitleTreeprocessor(Treeprocessor):
    """Record the text of the first ``<h1>`` as ``md.title``."""

    def run(self, root):
        for el in root.iter("h1"):
            self.md.title = heading_text(el, self.md)
            return None
        return None


class TitleExtension(Extension):
    def extendMarkdown(self, md):
        self.md = md
        md.title = None
        md.registerExtension(self)
        # After inline patterns (20) so heading text is complete, before unescape (0).
        md.treeprocessors.register(TitleTreeprocessor(md), "first_title", 6)

    def reset(self):
        self.md.title = None


def heading_text(el, md: markdown.Markdown) -> Optional[str]:
    # Runs the postprocessors, which put stashed smart quotes and entities back.
    text = strip_tags(render_inner_html(el, md))
    text = html_lib.unescape(text)
    text = WHITESPACE_RE.sub(" ", text).strip()
    return text or None


def title_from_filename(name: str) -> str:
    stem = Path(name).stem
    return NAME_SEPARATOR_RE.sub(" ", stem).strip() or "Untitled"


def create_markdown(highlight: bool = True) -> markdown.Markdown:
    extensions = [
        "fenced_code",
        "tables",
        "footnotes",
        "smarty",
        "pymdownx.tilde",
        "pymdownx.tasklist",
        TitleExtension(),
    ]
    extension_configs = {"pymdownx.tilde": {"subscript": False}}
    if highlight:
        extensions.append("codehilite")
        extension_configs["codehilite"] = {"guess_lang": False, "css_class": HIGHLIGHT_CSS_CLASS}
    return markdown.Markdown(extensions=extensions, extension_configs=extension_configs)


def convert_markdown(text: str, highlight: bool = True) -> Conversion:
    """Convert one Markdown document to an HTML fragment and its title.

    The title is the text of the first ``<h1>``, or ``None`` when the document
    has no such heading.
    """
    md = create_markdown(highlight=highlight)
    fragment = md.convert(text.lstrip("\ufeff"))
    return Conversion(html=fragment, title=md.title)
