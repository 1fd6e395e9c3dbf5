"""
WGSL Struct Parser Error Hierarchy
==================================

This module defines the exception hierarchy for the WGSL struct toolkit.
All exceptions inherit from WGSLStructError, allowing callers to catch all
package errors with a single except clause if desired.

Exception Hierarchy
-------------------
WGSLStructError (base)
├── LexError - no token pattern matches at some input offset
├── ParseError - required token/value absent or input exhausted
│   ├── UnknownTypeError - identifier type not registered as known
│   └── InvalidShorthandError - vec/mat shorthand letter not permitted
└── LayoutError - member layout cannot be computed

Error Message Format
--------------------
Errors carry the source location of the offending token when one is
available and follow this format:

    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)

Example:
    shader.wgsl:3:8: error: unknown type 'Light'
          l: Light,
             ^
    hint: did you mean 'Lights'?
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from wgsl_struct.tokens import Token


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Character offset into the source (0-indexed)
    """
    filename: str
    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception Class
# =============================================================================

class WGSLStructError(Exception):
    """
    Base exception for all WGSL struct toolkit errors.

    Provides the shared message formatting: location prefix, source
    context with a caret pointer, and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexer Errors
# =============================================================================

class LexError(WGSLStructError):
    """
    No token pattern matched at the current input offset.

    The catch-all Unknown token kind makes this unreachable for any
    single non-whitespace character, so in practice it only signals an
    exhausted or corrupted scan.

    Attributes:
        offset: Character offset at which scanning failed
        remaining: The unconsumed remainder of the input
    """

    def __init__(
        self,
        offset: int,
        remaining: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.offset = offset
        self.remaining = remaining
        super().__init__(
            f"unrecognized token at offset {offset}: {remaining!r}",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Parser Errors
# =============================================================================

def _describe_token(token: Optional["Token"]) -> str:
    if token is None:
        return "end of input"
    return f'{token.kind.label} "{token.text}"'


class ParseError(WGSLStructError):
    """
    Syntax error in a struct declaration.

    Raised when a required token or value is absent, input ends early, or
    a type specifier cannot be resolved. No partial AST is produced.

    Attributes:
        expected_kinds: Token kinds that would have been accepted
        expected_values: Token texts that would have been accepted
        found: The offending token, or None if input was exhausted
    """

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        expected_kinds: tuple = (),
        expected_values: tuple = (),
        found: Optional["Token"] = None,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.expected_kinds = tuple(expected_kinds)
        self.expected_values = tuple(expected_values)
        self.found = found
        if location is None and found is not None:
            location = found.location
        if message is None:
            message = self._expectation_message()
        super().__init__(message, location=location, hint=hint, source_line=source_line)

    def _expectation_message(self) -> str:
        expected = ", ".join(kind.label for kind in self.expected_kinds) or "token"
        if self.expected_values:
            values = ", ".join(f'"{v}"' for v in self.expected_values)
            expected = f"{expected} {values}"
        return f"expected {expected} but found {_describe_token(self.found)}"


class UnknownTypeError(ParseError):
    """
    An identifier was used as a member type but is not a known type.

    Known types are supplied by the caller; the parser never resolves a
    name it was not given.
    """

    def __init__(
        self,
        type_name: str,
        found: Optional["Token"] = None,
        similar_types: Optional[list[str]] = None,
        source_line: Optional[str] = None,
    ):
        self.type_name = type_name
        self.similar_types = similar_types or []

        if self.similar_types:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_types[:3])
            hint = f"did you mean {suggestions}?"
        else:
            hint = "supply the struct as a known type before referencing it"

        super().__init__(
            f"unknown type '{type_name}' in type specifier",
            found=found,
            hint=hint,
            source_line=source_line,
        )


class InvalidShorthandError(ParseError):
    """
    A vector or matrix shorthand letter is outside its permitted set.

    Vectors accept h, f, i, u; matrices accept only h and f.
    """

    def __init__(
        self,
        type_name: str,
        allowed: str,
        found: Optional["Token"] = None,
        source_line: Optional[str] = None,
    ):
        self.type_name = type_name
        self.allowed = allowed
        super().__init__(
            f"invalid shorthand type specifier '{type_name}'",
            found=found,
            hint=f"shorthand suffix must be one of: {', '.join(allowed)}",
            source_line=source_line,
        )


# =============================================================================
# Layout Errors
# =============================================================================

class LayoutError(WGSLStructError):
    """
    Memory layout of a struct cannot be computed.

    Examples:
        - @align value that is not a power of two
        - @size value smaller than the member's natural size
        - runtime-sized array that is not the last member
    """
    pass
