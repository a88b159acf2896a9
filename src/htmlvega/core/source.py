"""Source loading: literal markup, HTML files, and Markdown files with YAML frontmatter"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}


@dataclass
class SourceDoc:
    html: str
    frontmatter: dict[str, Any] = field(default_factory=dict)
    path: Optional[Path] = None

    @property
    def render_options(self) -> dict[str, Any]:
        """The frontmatter `render:` mapping, or {} when absent."""
        opts = self.frontmatter.get('render') or {}
        if not isinstance(opts, dict):
            raise ValueError(f"Invalid frontmatter 'render': expected a mapping, got {type(opts).__name__}")
        return opts


def _make_parser(preset: str) -> MarkdownIt:
    return MarkdownIt(preset, options_update={"linkify": False})


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def render_markdown(text: str, preset: str = "commonmark") -> str:
    return _make_parser(preset).render(text).strip()


def load_file(path: Path, markdown: Optional[bool] = None) -> SourceDoc:
    """Read path; .md/.mdx (or markdown=True) is rendered to HTML after frontmatter is stripped."""
    raw = path.read_text(encoding='utf-8')
    is_markdown = path.suffix in MD_EXTENSIONS if markdown is None else markdown
    frontmatter, body = _strip_frontmatter(raw)
    html = render_markdown(body) if is_markdown else body.strip()
    return SourceDoc(html=html, frontmatter=frontmatter, path=path)


def load_source(source: str, markdown: Optional[bool] = None) -> SourceDoc:
    """Load from a file path if one exists, else treat source as literal markup."""
    path = Path(source)
    try:
        is_file = path.is_file()
    except (OSError, ValueError):
        is_file = False
    if is_file:
        return load_file(path, markdown)
    if markdown:
        frontmatter, body = _strip_frontmatter(source)
        return SourceDoc(html=render_markdown(body), frontmatter=frontmatter)
    return SourceDoc(html=source)
