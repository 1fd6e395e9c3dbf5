"""
WGSL Struct Lexer (Tokenizer)
=============================

Converts WGSL struct source text into an ordered list of classified
tokens. Whitespace and // comments are skipped; everything else becomes
exactly one token.

The scan is single-pass, strictly left-to-right, with no backtracking.
At each position the patterns in TOKEN_PATTERNS are tried in priority
order and the first match wins. The Unknown kind matches any single
non-whitespace character, so the lexer never rejects input; invalid
characters surface as parse errors instead.

Example Usage
-------------
>>> from wgsl_struct.lexer import tokenize
>>> for token in tokenize("a: vec3f,"):
...     print(token)
Token(IDENTIFIER, 'a', 1:1)
Token(PUNCTUATOR, ':', 1:2)
Token(KEYWORD, 'vec3f', 1:4)
Token(PUNCTUATOR, ',', 1:9)
"""

import logging
from typing import Iterator

from wgsl_struct.errors import LexError, SourceLocation
from wgsl_struct.tokens import Token, TokenKind, TOKEN_PATTERNS, WHITESPACE_PATTERN

logger = logging.getLogger(__name__)


class WGSLLexer:
    """
    Tokenizes WGSL struct declarations.

    Usage:
        lexer = WGSLLexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source text being tokenized
        filename: Name of the source file (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source text.

        Yields:
            Token objects for every lexical element except comments

        Raises:
            LexError: If no pattern matches at the current position
        """
        while not self._at_end():
            self._skip_whitespace()
            if self._at_end():
                break

            kind, text = self._scan()
            token = Token(
                kind=kind,
                text=text,
                offset=self._pos,
                line=self._line,
                column=self._pos - self._line_start_pos + 1,
                filename=self.filename,
            )
            self._advance(len(text))

            if kind is not TokenKind.COMMENT:
                yield token

    # =========================================================================
    # Scanning Helpers
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _scan(self) -> tuple[TokenKind, str]:
        """Return the kind and text of the highest-priority match at _pos."""
        for kind, pattern in TOKEN_PATTERNS:
            match = pattern.match(self.source, self._pos)
            if match and match.end() > self._pos:
                return kind, match.group(0)

        raise LexError(
            self._pos,
            self.source[self._pos:],
            location=self._location(),
            source_line=self._current_line(),
        )

    def _skip_whitespace(self) -> None:
        match = WHITESPACE_PATTERN.match(self.source, self._pos)
        if match:
            self._advance(match.end() - self._pos)

    def _advance(self, count: int) -> None:
        """Move forward count characters, tracking line starts."""
        end = self._pos + count
        newline = self.source.rfind("\n", self._pos, end)
        if newline != -1:
            self._line += self.source.count("\n", self._pos, end)
            self._line_start_pos = newline + 1
        self._pos = end

    def _location(self) -> SourceLocation:
        return SourceLocation(
            self.filename,
            self._line,
            self._pos - self._line_start_pos + 1,
            self._pos,
        )

    def _current_line(self) -> str:
        end = self.source.find("\n", self._line_start_pos)
        if end == -1:
            end = len(self.source)
        return self.source[self._line_start_pos:end]


def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """
    Tokenize WGSL struct source text.

    Args:
        source: Source text
        filename: Name used in diagnostics

    Returns:
        Ordered list of tokens, comments excluded

    Raises:
        LexError: If no token pattern matches at some offset
    """
    tokens = list(WGSLLexer(source, filename).tokenize())
    logger.debug(f"Tokenized {filename}: {len(tokens)} tokens")
    return tokens
