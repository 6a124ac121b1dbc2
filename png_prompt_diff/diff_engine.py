"""
Prompt Diff Engine

Marks the content tokens of a prompt that are not shared by every text in a
comparison set, and places line-break markers after BREAK keywords. Output is
a flat list of segments; mapping them to HTML or terminal text is left to
png_prompt_diff.render.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set

from .config import Settings
from .tokenizer import Token, TokenKind, content_keys, tokenize

logger = logging.getLogger(__name__)

GRANULARITIES = Settings.GRANULARITIES
BREAK_KEYWORD = "BREAK"


class SegmentKind(Enum):
    TEXT = "text"
    HIGHLIGHT = "highlight"
    LINE_BREAK = "line_break"


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    text: str = ""


LINE_BREAK = Segment(SegmentKind.LINE_BREAK)


def resolve_granularity(granularity: Optional[str] = None) -> bool:
    """Return True when ``granularity`` asks for word-level tokens."""
    value = (granularity or Settings.DIFF_GRANULARITY).lower()
    if value not in GRANULARITIES:
        raise ValueError(f"Unknown diff granularity '{value}', expected one of {GRANULARITIES}")
    return value == "word"


def _append_text(segments: List[Segment], text: str) -> None:
    if not text:
        return
    if segments and segments[-1].kind is SegmentKind.TEXT:
        segments[-1] = Segment(SegmentKind.TEXT, segments[-1].text + text)
    else:
        segments.append(Segment(SegmentKind.TEXT, text))


def _is_difference(token: Token, key_sets: Sequence[Set[str]]) -> bool:
    if token.kind is not TokenKind.CONTENT or not token.key:
        return False
    return any(token.key not in keys for keys in key_sets)


def _assemble(tokens: Sequence[Token], key_sets: Sequence[Set[str]]) -> List[Segment]:
    segments: List[Segment] = []
    defer_break = False

    for index, token in enumerate(tokens):
        if token.kind is TokenKind.BREAK:
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if following is not None and following.kind is TokenKind.COMMA:
                # keep "BREAK," together, the marker goes after the comma
                _append_text(segments, token.text)
                defer_break = True
                continue
            split_at = token.text.index(BREAK_KEYWORD) + len(BREAK_KEYWORD)
            _append_text(segments, token.text[:split_at])
            segments.append(LINE_BREAK)
            _append_text(segments, token.text[split_at:])
        elif _is_difference(token, key_sets):
            segments.append(Segment(SegmentKind.HIGHLIGHT, token.text))
        else:
            _append_text(segments, token.text)
            if defer_break:
                segments.append(LINE_BREAK)
        defer_break = False

    return segments


def highlight(
    current_text: str,
    comparison_texts: Optional[Iterable[str]] = None,
    granularity: Optional[str] = None,
) -> List[Segment]:
    """
    Annotate ``current_text`` against ``comparison_texts``.

    A content token is highlighted when its trimmed text is missing from at
    least one comparison text. Delimiters (commas, BREAK, whitespace) are never
    highlighted. With no comparison texts only BREAK formatting is applied.

    Args:
        current_text: Prompt to annotate.
        comparison_texts: Other prompts, tokenized the same way.
        granularity: "phrase" or "word"; defaults to Settings.DIFF_GRANULARITY.
    """
    split_whitespace = resolve_granularity(granularity)
    if not current_text:
        return []

    tokens = tokenize(current_text, split_whitespace)
    key_sets = [content_keys(text, split_whitespace) for text in (comparison_texts or [])]
    logger.debug(f"Diffing {len(tokens)} tokens against {len(key_sets)} comparison texts")
    return _assemble(tokens, key_sets)


def format_breaks(text: str) -> List[Segment]:
    """BREAK formatting only, no highlighting."""
    if not text:
        return []
    return _assemble(tokenize(text), [])

