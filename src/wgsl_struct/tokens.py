"""
WGSL Token Model
================

Defines the fixed catalog of lexical token kinds recognised inside WGSL
struct declarations, and the immutable Token value the lexer produces.

Token Catalog (priority order)
------------------------------
| Kind        | Pattern                                               |
|-------------|-------------------------------------------------------|
| Comment     | // to end of line (recognised, never emitted)         |
| Keyword     | struct size align array bool i32 u32 f32 f16          |
|             | vec{2,3,4}[iufh]?  mat{2,3,4}x{2,3,4}[fh]?  (whole word) |
| DecimalInt  | 0 or [1-9][0-9]*, optional i/u suffix                 |
| Identifier  | [A-Za-z_][A-Za-z0-9_]*                                |
| Punctuator  | : , { } @ ( ) > <                                     |
| Unknown     | any single non-whitespace character                   |

The first pattern that matches at a position wins. Keywords must be tried
before identifiers, otherwise every keyword would lex as an identifier.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from wgsl_struct.errors import SourceLocation


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Lexical categories, in the order the lexer tries them."""

    COMMENT = "Comment"
    KEYWORD = "Keyword"
    DECIMAL_INT = "DecimalInt"
    IDENTIFIER = "Identifier"
    PUNCTUATOR = "Punctuator"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        """Human-readable name used in diagnostics."""
        return self.value


# =============================================================================
# Pattern Catalog
# =============================================================================

KEYWORD_PATTERN = re.compile(
    r"(?:struct|size|align|array|bool|i32|u32|f32|f16"
    r"|vec[234][iufh]?|mat[234]x[234][fh]?)\b"
)

# Ordered (kind, pattern) pairs; order is significant
TOKEN_PATTERNS: tuple[tuple[TokenKind, re.Pattern], ...] = (
    (TokenKind.COMMENT, re.compile(r"//[^\r\n]*")),
    (TokenKind.KEYWORD, KEYWORD_PATTERN),
    (TokenKind.DECIMAL_INT, re.compile(r"(?:0[iu]?|[1-9][0-9]*[iu]?)")),
    (TokenKind.IDENTIFIER, re.compile(r"[A-Za-z_][A-Za-z0-9_]*")),
    (TokenKind.PUNCTUATOR, re.compile(r"[:,{}@()<>]")),
    (TokenKind.UNKNOWN, re.compile(r"\S")),
)

WHITESPACE_PATTERN = re.compile(r"\s+")


# A kind/value filter is either a single acceptable item or a collection
KindFilter = Union[TokenKind, Iterable[TokenKind], None]
ValueFilter = Union[str, Iterable[str], None]


def as_filter(value) -> tuple:
    """Normalise a single value or collection of values to a tuple."""
    if value is None:
        return ()
    if isinstance(value, (str, TokenKind)):
        return (value,)
    return tuple(value)


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexical unit.

    Attributes:
        kind: The TokenKind classification
        text: The matched substring
        offset: Character offset of the first character (0-indexed)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    kind: TokenKind
    text: str
    offset: int = 0
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column, self.offset)

    def matches(self, kind: KindFilter = None, value: ValueFilter = None) -> bool:
        """
        Return True if this token satisfies the kind and value filters.

        An empty filter accepts anything.
        """
        kinds = as_filter(kind)
        values = as_filter(value)
        return (not kinds or self.kind in kinds) and (not values or self.text in values)


def describe(token: Optional[Token]) -> str:
    """Short description of a token (or end of input) for log messages."""
    if token is None:
        return "end of input"
    return f"{token.kind.label} {token.text!r}"
