"""
Prompt Tokenizer

Splits prompt text into an ordered, lossless sequence of delimiter and content
tokens. Delimiters are comma runs and the BREAK keyword (with any surrounding
whitespace); in word mode, plain whitespace runs are delimiters as well.
Joining the text of every token gives back the input exactly.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Set


class TokenKind(Enum):
    COMMA = "comma"
    BREAK = "break"
    WHITESPACE = "whitespace"
    CONTENT = "content"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    start: int = 0

    @property
    def key(self) -> str:
        """Trimmed text used for set membership."""
        return self.text.strip()

    @property
    def is_delimiter(self) -> bool:
        return self.kind is not TokenKind.CONTENT

    @property
    def end(self) -> int:
        return self.start + len(self.text)


# Alternation order is the priority order: comma, then BREAK, then whitespace.
_PHRASE_DELIMITERS = re.compile(
    r"(?P<comma>\s*,\s*)|(?P<brk>\s*\bBREAK\b\s*)"
)
_WORD_DELIMITERS = re.compile(
    r"(?P<comma>\s*,\s*)|(?P<brk>\s*\bBREAK\b\s*)|(?P<ws>\s+)"
)

_GROUP_KINDS = {
    "comma": TokenKind.COMMA,
    "brk": TokenKind.BREAK,
    "ws": TokenKind.WHITESPACE,
}


def tokenize(text: str, split_whitespace: bool = False) -> List[Token]:
    pattern = _WORD_DELIMITERS if split_whitespace else _PHRASE_DELIMITERS
    tokens: List[Token] = []
    pos = 0
    for match in pattern.finditer(text):
        if match.start() > pos:
            tokens.append(Token(TokenKind.CONTENT, text[pos:match.start()], pos))
        tokens.append(Token(_GROUP_KINDS[match.lastgroup], match.group(), match.start()))
        pos = match.end()
    if pos < len(text):
        tokens.append(Token(TokenKind.CONTENT, text[pos:], pos))
    return tokens


def content_keys(text: str, split_whitespace: bool = False) -> Set[str]:
    """Trimmed keys of all non-blank content tokens in ``text``."""
    if not text:
        return set()
    return {
        token.key
        for token in tokenize(text, split_whitespace)
        if token.kind is TokenKind.CONTENT and token.key
    }
