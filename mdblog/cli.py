from __future__ import annotations

import argparse
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

from .config import DEFAULT_CONFIG, BuildSettings, load_config
from .errors import BuildError, ConfigError, OutputDirectoryError
from .models import BuildResult, PageLink, SourceDocument
from .pages import MISSING_TITLE_POLICIES, PageResult, build_index, build_page
from .render import load_index_template, load_page_template
from .sources import ORDER_KEYS, collect_sources, resolve_order_key
from .style import highlight_css, load_style
from .utils import parse_bool, parse_int, resolve_workers


def check_output_dir(output_dir: Path) -> None:
    if not output_dir.is_dir():
        raise OutputDirectoryError("Rendered outputs directory not found", output_dir)
    if not os.access(output_dir, os.W_OK):
        raise OutputDirectoryError("Rendered outputs directory is not writable", output_dir)


def build_site(settings: BuildSettings) -> BuildResult:
    """Run a full build: every page, then the index.

    Raises ``BuildError`` for anything that stops the build. Documents that
    fail on their own are reported and listed in ``BuildResult.skipped``.
    """
    output_dir = settings.rendered_outputs
    check_output_dir(output_dir)
    if settings.missing_title not in MISSING_TITLE_POLICIES:
        choices = ", ".join(MISSING_TITLE_POLICIES)
        raise ConfigError(f"Unknown missing title policy {settings.missing_title!r} (expected one of: {choices})")
    order_key = resolve_order_key(settings.order_by)
    page_template = load_page_template(settings.templates)
    index_template = load_index_template(settings.templates)
    highlight_style = highlight_css(settings.pygments_style) if settings.highlight else ""

    style = load_style(settings.css_source)
    documents = collect_sources(settings.md_sources, order_key)

    def render_document(document: SourceDocument) -> PageResult:
        return build_page(
            document,
            page_template,
            style,
            output_dir,
            base_url=settings.base_url,
            site_name=settings.site_name,
            highlight_style=highlight_style,
            missing_title=settings.missing_title,
            highlight=settings.highlight,
        )

    workers = resolve_workers(settings.build_workers, len(documents))
    if workers > 1:
        # map() yields in submission order, which keeps the index in source order.
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(render_document, documents))
    else:
        outcomes = [render_document(document) for document in documents]

    result = BuildResult()
    for outcome in outcomes:
        if isinstance(outcome, PageLink):
            result.pages.append(outcome)
        else:
            result.skipped.append(outcome)
    result.index = build_index(index_template, output_dir, result.pages, settings.site_name)
    return result


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config", default=DEFAULT_CONFIG)
    pre_args, _ = pre_parser.parse_known_args(argv)
    config_path = Path(pre_args.config)
    config = load_config(config_path)

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        return str(cfg_value(key, default))

    def cfg_path(key: str) -> Optional[str]:
        value = config.get(key)
        if value is None or str(value) == "":
            return None
        path = Path(str(value))
        if not path.is_absolute():
            path = config_path.parent / path
        return str(path)

    parser = argparse.ArgumentParser(description="Render a directory of Markdown files into a static HTML blog.")
    parser.add_argument("--config", default=pre_args.config, help="Path to config file (TOML/YAML/JSON).")
    parser.add_argument(
        "-c",
        "--css-source",
        default=cfg_path("css_source"),
        help="Path to the CSS file inlined into every page.",
    )
    parser.add_argument(
        "-m",
        "--md-sources",
        default=cfg_path("md_sources"),
        help="Directory containing the Markdown files.",
    )
    parser.add_argument(
        "-r",
        "--rendered-outputs",
        default=cfg_path("rendered_outputs"),
        help="Directory the rendered HTML files are written to.",
    )
    parser.add_argument(
        "--base-url",
        default=cfg_str("base_url", "./"),
        help="Prefix for page links on the index.",
    )
    parser.add_argument("--site-name", default=cfg_str("site_name", ""), help="Site title for the index page.")
    parser.add_argument(
        "--order-by",
        choices=sorted(ORDER_KEYS),
        default=cfg_str("order_by", "created"),
        help="File timestamp used to order posts.",
    )
    parser.add_argument(
        "--missing-title",
        choices=MISSING_TITLE_POLICIES,
        default=cfg_str("missing_title", "filename"),
        help="What to do with posts without a level-one heading.",
    )
    parser.add_argument(
        "--templates",
        default=cfg_path("templates") or "",
        help="Directory with page.html and index.html overriding the bundled templates.",
    )
    parser.add_argument(
        "--build-workers",
        default=parse_int(config.get("build_workers"), 0),
        type=int,
        help="Number of worker threads for rendering (0 = auto).",
    )
    parser.add_argument(
        "--highlight",
        action=argparse.BooleanOptionalAction,
        default=parse_bool(cfg_value("highlight", True)),
        help="Syntax highlight code blocks with Pygments.",
    )
    parser.add_argument(
        "--pygments-style",
        default=cfg_str("pygments_style", "default"),
        help="Pygments style for highlighted code.",
    )
    args = parser.parse_args(argv)
    for name in ("css_source", "md_sources", "rendered_outputs"):
        if not getattr(args, name):
            parser.error(f"--{name.replace('_', '-')} is required (or set {name} in the config file)")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        args = parse_args(argv)
        start = time.perf_counter()
        result = build_site(BuildSettings.from_args(args))
    except BuildError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"{len(result.pages)} pages written, {len(result.skipped)} skipped, index at {result.index}")
