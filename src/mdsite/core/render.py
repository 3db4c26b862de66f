"""Markdown-to-HTML rendering with markdown-it, plus heading and excerpt extraction"""

import logging
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdsite.core.models import Heading, RenderedBody
from mdsite.core.utils.slug import unique_anchor


logger = logging.getLogger(__name__)

PRESETS = ('gfm-like', 'commonmark')
TEXT_TOKENS = {'text', 'code_inline', 'html_inline'}
BREAK_TOKENS = {'softbreak', 'hardbreak'}


@lru_cache(maxsize=None)
def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    if preset not in PRESETS:
        raise ValueError(f"Unknown parser preset {preset!r}; expected one of {', '.join(PRESETS)}")
    return MarkdownIt(preset, options_update={"linkify": False})


def heading_level(token: Token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def inline_text(token: Token) -> str:
    """Plain text of an inline token: markup dropped, line breaks folded to spaces."""
    parts = []
    for child in token.children or []:
        if child.type in TEXT_TOKENS:
            parts.append(child.content)
        elif child.type in BREAK_TOKENS:
            parts.append(' ')
        elif child.type == 'image':
            parts.append(child.content)
    return ''.join(parts).strip()


def collect_headings(tokens: list[Token], add_anchors: bool = False) -> list[Heading]:
    """Collect headings in document order; optionally set their id attributes."""
    headings = []
    seen: dict[str, int] = {}
    for i, tok in enumerate(tokens):
        level = heading_level(tok)
        if level is None:
            continue
        text = inline_text(tokens[i + 1])
        anchor = unique_anchor(text, seen)
        if add_anchors:
            tok.attrSet('id', anchor)
        headings.append(Heading(level=level, text=text, anchor=anchor))
    return headings


def first_paragraph(tokens: list[Token]) -> str:
    """Plain text of the first top-level paragraph, or '' if there is none."""
    for i, tok in enumerate(tokens):
        if tok.type == 'paragraph_open' and tok.level == 0:
            return inline_text(tokens[i + 1])
    return ''


def render_markdown(body: str, preset: str = 'gfm-like', anchors: bool = False) -> RenderedBody:
    """Render a Markdown body to HTML. Pure: equal input gives byte-identical output."""
    md = make_parser(preset)
    env: dict = {}
    tokens = md.parse(body, env)
    headings = collect_headings(tokens, add_anchors=anchors)
    html = md.renderer.render(tokens, md.options, env)
    logger.debug("rendered %d tokens, %d headings", len(tokens), len(headings))
    return RenderedBody(html=html, headings=headings, excerpt=first_paragraph(tokens))
