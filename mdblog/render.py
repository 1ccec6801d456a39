from __future__ import annotations

import os
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Optional

from .errors import TemplateError

PLACEHOLDER_RE = re.compile(r"{{\s*(\w+)\s*}}")

PAGE_TEMPLATE = "page.html"
INDEX_TEMPLATE = "index.html"


@dataclass(frozen=True)
class Template:
    name: str
    text: str
    required: frozenset[str]
    optional: frozenset[str] = frozenset()

    def render(self, **context: str) -> str:
        return render_template(self, **context)


PAGE_KEYS = (frozenset({"style", "content"}), frozenset({"title", "highlight_style"}))
INDEX_KEYS = (frozenset({"links"}), frozenset({"title"}))


def placeholders(text: str) -> set[str]:
    return set(PLACEHOLDER_RE.findall(text))


def check_template(template: Template) -> None:
    found = placeholders(template.text)
    missing = template.required - found
    if missing:
        names = ", ".join(sorted(missing))
        raise TemplateError(f"Template {template.name} is missing placeholders: {names}")
    unknown = found - template.required - template.optional
    if unknown:
        names = ", ".join(sorted(unknown))
        raise TemplateError(f"Template {template.name} uses unknown placeholders: {names}")


def render_template(template: Template, **context: str) -> str:
    keys = set(context)
    if not template.required <= keys:
        names = ", ".join(sorted(template.required - keys))
        raise TemplateError(f"No value given for {names} in template {template.name}")

    # One pass over the template, so placeholders inside values stay literal.
    return PLACEHOLDER_RE.sub(lambda m: context.get(m.group(1), m.group(0)), template.text)


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def load_template(
    name: str,
    required: frozenset[str],
    optional: frozenset[str],
    templates_dir: Optional[Path] = None,
) -> Template:
    """Load a template from ``templates_dir`` or the bundled defaults."""
    try:
        if templates_dir is not None:
            text = read_template(templates_dir / name)
        else:
            text = resources.files("mdblog").joinpath("templates").joinpath(name).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        location = templates_dir / name if templates_dir is not None else None
        raise TemplateError(f"Template {name} could not be read", location, exc) from exc
    template = Template(name=name, text=text, required=required, optional=optional)
    check_template(template)
    return template


def load_page_template(templates_dir: Optional[Path] = None) -> Template:
    return load_template(PAGE_TEMPLATE, *PAGE_KEYS, templates_dir=templates_dir)


def load_index_template(templates_dir: Optional[Path] = None) -> Template:
    return load_template(INDEX_TEMPLATE, *INDEX_KEYS, templates_dir=templates_dir)


def write_text(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` in one step.

    The data goes to a temporary file next to the target first, so readers
    never see a half written page.
    """
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
