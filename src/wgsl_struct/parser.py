"""
WGSL Struct Recursive Descent Parser
====================================

This module implements a recursive descent parser for WGSL struct
declarations. It consumes the token list produced by the lexer and
builds a StructDecl AST.

Grammar (Simplified EBNF)
-------------------------
struct_decl     ::= 'struct'? IDENTIFIER '{' member_list '}'
member_list     ::= (member (',' member)* ','?)?
member          ::= attribute* IDENTIFIER ':' type_spec
attribute       ::= '@' ('align' | 'size') '(' int_literal ')'
type_spec       ::= scalar | vector | matrix | array | IDENTIFIER
scalar          ::= 'bool' | 'i32' | 'u32' | 'f32' | 'f16'
vector          ::= 'vec'[234][hfiu] | 'vec'[234] '<' type_spec '>'
matrix          ::= 'mat'[234]'x'[234][hf] | 'mat'[234]'x'[234] '<' type_spec '>'
array           ::= 'array' '<' type_spec (',' int_literal)? '>'
int_literal     ::= DECIMAL_INT    (optional i/u suffix, no sign, no expressions)

An IDENTIFIER type must name one of the known types supplied by the
caller. It becomes a StructReference to that exact StructDecl object.

Example Usage
-------------
>>> from wgsl_struct.parser import parse_struct
>>> inner = parse_struct("struct Light { color: vec3f }")
>>> outer = parse_struct("struct Scene { light: Light }", [inner])
>>> outer.members[0].type.target is inner
True
"""

import difflib
import logging
import re
from types import MappingProxyType
from typing import Iterable, Optional

from wgsl_struct.errors import (
    ParseError,
    UnknownTypeError,
    InvalidShorthandError,
    SourceLocation,
)
from wgsl_struct.lexer import tokenize
from wgsl_struct.tokens import (
    Token,
    TokenKind,
    KindFilter,
    ValueFilter,
    as_filter,
    describe,
)
from wgsl_struct.ast import (
    StructDecl,
    StructMember,
    Identifier,
    IntLiteral,
    AlignAttr,
    SizeAttr,
    Attribute,
    ScalarKind,
    ScalarType,
    VectorType,
    MatrixType,
    FixedArrayType,
    RuntimeArrayType,
    StructReference,
    TypeSpecifier,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Type Name Patterns
# =============================================================================

SCALAR_TYPE_PATTERN = re.compile(r"bool|i32|u32|f32|f16")
# Letter group is deliberately wider than the permitted set so that
# identifiers such as vec3b report an invalid shorthand
VECTOR_TYPE_PATTERN = re.compile(r"vec([234])([a-z])?")
MATRIX_TYPE_PATTERN = re.compile(r"mat([234])x([234])([a-z])?")

SHORTHAND_TO_SCALAR: dict[str, ScalarKind] = {
    "h": ScalarKind.F16,
    "f": ScalarKind.F32,
    "i": ScalarKind.I32,
    "u": ScalarKind.U32,
}
VECTOR_SHORTHANDS = "hfiu"
MATRIX_SHORTHANDS = "hf"


# =============================================================================
# Parser State
# =============================================================================

class ParserState:
    """
    Cursor over a token list plus the registry of known struct types.

    A state is owned by exactly one parse. The cursor only moves forward;
    the known-types registry is built once here and is read-only.

    Attributes:
        tokens: The full token sequence
        position: Index of the current token
        known_types: Read-only mapping of struct name -> StructDecl
        filename: Source filename for error messages
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        known_types: Iterable[StructDecl] = (),
        source: Optional[str] = None,
        filename: str = "<input>",
        position: int = 0,
    ):
        self.tokens = tuple(tokens)
        self.position = position
        self.filename = filename
        self._source_lines = source.splitlines() if source else []

        registry: dict[str, StructDecl] = {}
        for decl in known_types:
            registry[decl.name.value] = decl
        self.known_types = MappingProxyType(registry)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def at_end(self) -> bool:
        """Check if all tokens have been consumed."""
        return self.position >= len(self.tokens)

    @property
    def current(self) -> Optional[Token]:
        """The token under the cursor, or None once input is exhausted."""
        if self.at_end():
            return None
        return self.tokens[self.position]

    def peek(self, kind: KindFilter = None, value: ValueFilter = None) -> Optional[Token]:
        """
        Return the current token if it matches, without advancing.

        Args:
            kind: Acceptable token kind, or a collection of kinds
            value: Acceptable token text, or a collection of texts

        Returns:
            The matching token, or None
        """
        token = self.current
        if token is None or not token.matches(kind, value):
            return None
        return token

    def consume(self, kind: KindFilter = None, value: ValueFilter = None) -> Token:
        """
        Consume and return the current token, which must match.

        Raises:
            ParseError: If input is exhausted or the token does not match
        """
        token = self.current
        if token is None or not token.matches(kind, value):
            raise ParseError(
                expected_kinds=as_filter(kind),
                expected_values=as_filter(value),
                found=token,
                location=self.location(token),
                source_line=self.source_line(token),
            )
        self.position += 1
        return token

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def location(self, token: Optional[Token]) -> Optional[SourceLocation]:
        """Location of token, or just past the last token on exhaustion."""
        if token is not None:
            return token.location
        if not self.tokens:
            return None
        last = self.tokens[-1]
        return SourceLocation(
            last.filename,
            last.line,
            last.column + len(last.text),
            last.offset + len(last.text),
        )

    def source_line(self, token: Optional[Token]) -> Optional[str]:
        """Get source line for error reporting."""
        location = self.location(token)
        if location is None:
            return None
        if 0 < location.line <= len(self._source_lines):
            return self._source_lines[location.line - 1]
        return None


# =============================================================================
# Grammar Productions
# =============================================================================

def parse_struct_decl(state: ParserState) -> StructDecl:
    """
    Parse a complete struct declaration.

    The leading 'struct' keyword is optional. A trailing comma after the
    last member is accepted but not required.
    """
    if state.peek(TokenKind.KEYWORD, "struct"):
        state.consume()
    name = state.consume(TokenKind.IDENTIFIER)
    state.consume(TokenKind.PUNCTUATOR, "{")

    members: list[StructMember] = []
    while True:
        member = parse_member_declaration(state)
        if member is None:
            break
        members.append(member)
        if state.peek(TokenKind.PUNCTUATOR, ","):
            state.consume()
        else:
            break

    state.consume(TokenKind.PUNCTUATOR, "}")

    logger.debug(f"Parsed struct '{name.text}' with {len(members)} members")
    return StructDecl(Identifier(name.text), tuple(members))


def parse_member_attributes(state: ParserState) -> list[Attribute]:
    """Parse zero or more @align(n) / @size(n) attributes."""
    attrs: list[Attribute] = []
    while state.peek(TokenKind.PUNCTUATOR, "@"):
        state.consume()
        keyword = state.consume(TokenKind.KEYWORD, ("align", "size"))
        state.consume(TokenKind.PUNCTUATOR, "(")
        value = parse_int_literal(state)
        if keyword.text == "align":
            attrs.append(AlignAttr(value))
        else:
            attrs.append(SizeAttr(value))
        state.consume(TokenKind.PUNCTUATOR, ")")
    return attrs


def parse_member_declaration(state: ParserState) -> Optional[StructMember]:
    """
    Parse one member, or return None if no member starts here.

    Attributes not followed by a member name end the member list and
    are discarded.
    """
    attrs = parse_member_attributes(state)
    name = state.peek(TokenKind.IDENTIFIER)
    if name is None:
        return None
    state.consume()

    state.consume(TokenKind.PUNCTUATOR, ":")
    type_spec = parse_type(state)
    return StructMember(Identifier(name.text), type_spec, tuple(attrs))


def parse_int_literal(state: ParserState) -> IntLiteral:
    """Parse a decimal integer literal; only literals are supported."""
    token = state.consume(TokenKind.DECIMAL_INT)
    return IntLiteral.from_text(token.text)


def parse_template_type(state: ParserState) -> TypeSpecifier:
    """Parse '<' type_spec '>'."""
    state.consume(TokenKind.PUNCTUATOR, "<")
    type_spec = parse_type(state)
    state.consume(TokenKind.PUNCTUATOR, ">")
    return type_spec


def parse_array_type(state: ParserState) -> TypeSpecifier:
    """Parse the template clause after 'array'."""
    state.consume(TokenKind.PUNCTUATOR, "<")
    element_type = parse_type(state)
    if state.peek(TokenKind.PUNCTUATOR, ","):
        state.consume()
        size = parse_int_literal(state)
        state.consume(TokenKind.PUNCTUATOR, ">")
        return FixedArrayType(element_type, size)
    state.consume(TokenKind.PUNCTUATOR, ">")
    return RuntimeArrayType(element_type)


def parse_type(state: ParserState) -> TypeSpecifier:
    """
    Parse a type specifier.

    Raises:
        ParseError: If the type is malformed
        UnknownTypeError: If an identifier is not a known type
        InvalidShorthandError: If a vec/mat shorthand letter is not permitted
    """
    token = state.consume((TokenKind.KEYWORD, TokenKind.IDENTIFIER))

    if token.kind is TokenKind.IDENTIFIER:
        return _resolve_named_type(state, token)

    text = token.text
    if text == "array":
        return parse_array_type(state)

    if SCALAR_TYPE_PATTERN.fullmatch(text):
        return ScalarType(ScalarKind(text))

    match = VECTOR_TYPE_PATTERN.fullmatch(text)
    if match:
        size = int(match.group(1))
        element_type = _element_type(state, token, match.group(2), VECTOR_SHORTHANDS)
        return VectorType(element_type, size)

    match = MATRIX_TYPE_PATTERN.fullmatch(text)
    if match:
        columns, rows = int(match.group(1)), int(match.group(2))
        element_type = _element_type(state, token, match.group(3), MATRIX_SHORTHANDS)
        return MatrixType(element_type, columns, rows)

    # struct / size / align are keywords but not types
    raise ParseError(
        f"expected type specifier but found {describe(token)}",
        found=token,
        source_line=state.source_line(token),
    )


def _element_type(
    state: ParserState,
    token: Token,
    shorthand: Optional[str],
    allowed: str,
) -> TypeSpecifier:
    """Element type from a shorthand letter, or from a <T> template clause."""
    if shorthand is None:
        return parse_template_type(state)
    if shorthand not in allowed:
        raise InvalidShorthandError(
            token.text,
            allowed,
            found=token,
            source_line=state.source_line(token),
        )
    return ScalarType(SHORTHAND_TO_SCALAR[shorthand])


def _resolve_named_type(state: ParserState, token: Token) -> StructReference:
    found = state.known_types.get(token.text)
    if found is not None:
        return StructReference(found)

    # vec3b, mat2x2i: shorthand spellings the lexer could not classify
    shorthand, allowed = None, ""
    if match := VECTOR_TYPE_PATTERN.fullmatch(token.text):
        shorthand, allowed = match.group(2), VECTOR_SHORTHANDS
    elif match := MATRIX_TYPE_PATTERN.fullmatch(token.text):
        shorthand, allowed = match.group(3), MATRIX_SHORTHANDS
    if shorthand is not None and shorthand not in allowed:
        raise InvalidShorthandError(
            token.text,
            allowed,
            found=token,
            source_line=state.source_line(token),
        )

    raise UnknownTypeError(
        token.text,
        found=token,
        similar_types=difflib.get_close_matches(token.text, list(state.known_types)),
        source_line=state.source_line(token),
    )


# =============================================================================
# Public Entry Points
# =============================================================================

def parse_struct(
    source: str,
    known_types: Iterable[StructDecl] = (),
    filename: str = "<input>",
) -> StructDecl:
    """
    Parse a single WGSL struct declaration.

    Args:
        source: Struct source text
        known_types: Previously parsed structs that members may reference
        filename: Name used in diagnostics

    Returns:
        The StructDecl AST root

    Raises:
        LexError: If the text cannot be tokenized
        ParseError: If the text is not a valid struct declaration, or
            anything but whitespace and comments follows it
    """
    tokens = tokenize(source, filename)
    state = ParserState(tokens, known_types, source=source, filename=filename)
    decl = parse_struct_decl(state)
    if not state.at_end():
        token = state.current
        raise ParseError(
            f"unexpected {describe(token)} after struct declaration",
            found=token,
            source_line=state.source_line(token),
        )
    return decl


def parse_structs(
    source: str,
    known_types: Iterable[StructDecl] = (),
    filename: str = "<input>",
) -> list[StructDecl]:
    """
    Parse consecutive struct declarations from one text.

    Each declaration may reference the supplied known types and every
    struct declared before it in the same text.

    Returns:
        StructDecl nodes in source order
    """
    tokens = tokenize(source, filename)
    known = list(known_types)
    decls: list[StructDecl] = []
    position = 0

    while position < len(tokens):
        state = ParserState(tokens, known, source=source, filename=filename, position=position)
        decl = parse_struct_decl(state)
        decls.append(decl)
        known.append(decl)
        position = state.position

    logger.debug(f"Parsed {len(decls)} structs from {filename}")
    return decls
