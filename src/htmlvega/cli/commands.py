"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from htmlvega.config import Settings, load_config
from htmlvega.core.export import write_spec
from htmlvega.core.parse import HTMLParser
from htmlvega.core.pipeline import HTMLToVegaLite
from htmlvega.core.registry import create_registry
from htmlvega.core.source import SourceDoc, load_source


SourceArg = Annotated[str, typer.Argument(help="HTML/Markdown file, or literal markup")]
MarkdownOpt = Annotated[Optional[bool], typer.Option("--markdown/--html", help="Force the source format")]
PresetOpt = Annotated[Optional[str], typer.Option("--preset", help="Tag registry preset: default or minimal")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _source(source: str, markdown: Optional[bool]) -> SourceDoc:
    try:
        doc = load_source(source, markdown)
    except (OSError, ValueError) as e:
        _fail(f"Cannot read source {source}", e)
    if not doc.html.strip():
        _fail("Source is empty")
    return doc


def _doc_overrides(doc: SourceDoc, cli: dict) -> dict:
    """Frontmatter render options, overridden by any CLI flags given."""
    try:
        merged = dict(doc.render_options)
    except ValueError as e:
        _fail(str(e))
    merged.update({k: v for k, v in cli.items() if v is not None})
    return merged


def verbose_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
    ):
    """Render formatted HTML text as positioned Vega-Lite text layers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def render_cmd(
    source: SourceArg,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Write the spec to this file")] = None,
    max_width: Annotated[Optional[float], typer.Option("--max-width", help="Wrap width in px")] = None,
    font_size: Annotated[Optional[float], typer.Option("--font-size", help="Base font size in px")] = None,
    font_family: Annotated[Optional[str], typer.Option("--font-family", help="Font family")] = None,
    line_height: Annotated[Optional[float], typer.Option("--line-height", help="Line height in px")] = None,
    background: Annotated[Optional[str], typer.Option("--background", help="Spec background colour")] = None,
    measure: Annotated[Optional[str], typer.Option("--measure", help="Measurement backend: approx or pillow")] = None,
    preset: PresetOpt = None,
    markdown: MarkdownOpt = None,
    ):
    """Convert SOURCE to a Vega-Lite spec (JSON on stdout, or --out FILE)."""
    doc = _source(source, markdown)
    settings = _settings(overrides=_doc_overrides(doc, {
        "max_width": max_width, "font_size": font_size, "font_family": font_family,
        "line_height": line_height, "background": background,
        "measure_backend": measure, "registry_preset": preset,
    }))
    try:
        spec = HTMLToVegaLite(settings).convert(doc.html)
    except ValueError as e:
        _fail("Render failed", e)

    if out:
        path = write_spec(spec, Path(out))
        typer.echo(f"  {doc.path or 'input'} -> {path}")
    else:
        typer.echo(json.dumps(spec, indent=2, ensure_ascii=False))


def parse_cmd(
    source: SourceArg,
    preset: PresetOpt = None,
    markdown: MarkdownOpt = None,
    ):
    """Print the parsed segments and errors of SOURCE as JSON."""
    doc = _source(source, markdown)
    settings = _settings(overrides=_doc_overrides(doc, {"registry_preset": preset}))
    details = HTMLParser(create_registry(settings.registry_preset)).parse_with_details(doc.html)
    typer.echo(details.model_dump_json(indent=2, exclude_none=True))


def validate_cmd(
    source: SourceArg,
    preset: PresetOpt = None,
    markdown: MarkdownOpt = None,
    ):
    """Report structural problems in SOURCE; exits 1 if any are found."""
    doc = _source(source, markdown)
    settings = _settings(overrides=_doc_overrides(doc, {"registry_preset": preset}))
    result = HTMLParser(create_registry(settings.registry_preset)).validate_html(doc.html)
    if result.is_valid:
        typer.echo("OK")
        return
    for error in result.errors:
        typer.echo(f"  {error}")
    typer.echo(f"{len(result.errors)} problem(s) found.", err=True)
    raise typer.Exit(1)


def tags_cmd(preset: PresetOpt = None):
    """List the tag names the registry supports."""
    settings = _settings(overrides={"registry_preset": preset})
    for name in sorted(create_registry(settings.registry_preset).supported_tags()):
        typer.echo(name)
