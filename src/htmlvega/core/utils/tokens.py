"""Markup tokenizer: splits HTML-like input into text, opening-tag and closing-tag tokens"""

import html
import re
from dataclasses import dataclass
from typing import Iterator, Union


TAG_RE = re.compile(r'<(/?)([a-zA-Z][a-zA-Z0-9]*)([^>]*)>')


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class OpenTag:
    name: str
    attributes: str = ""


@dataclass(frozen=True)
class CloseTag:
    name: str


Token = Union[Text, OpenTag, CloseTag]


def tokenize(markup: str) -> list[Token]:
    """Return the token stream for markup; tag names are lowercased, text is entity-decoded."""
    tokens: list[Token] = []
    pos = 0
    for m in TAG_RE.finditer(markup):
        if m.start() > pos:
            tokens.append(Text(html.unescape(markup[pos:m.start()])))
        name = m.group(2).lower()
        if m.group(1) == '/':
            tokens.append(CloseTag(name))
        else:
            tokens.append(OpenTag(name, m.group(3)))
        pos = m.end()
    if pos < len(markup):
        tokens.append(Text(html.unescape(markup[pos:])))
    return tokens


def iter_tags(markup: str) -> Iterator[tuple[bool, str]]:
    """Yield (is_closing, lowercase_name) for every tag occurrence in markup."""
    for m in TAG_RE.finditer(markup):
        yield m.group(1) == '/', m.group(2).lower()


def mask_tags(markup: str, marker: str = "\x00") -> str:
    """Replace every tag with a single non-whitespace marker character."""
    return TAG_RE.sub(marker, markup)
