"""
WGSL Struct Parser
==================

Parses WGSL ``struct`` declarations into an immutable AST and renders
them back to canonical source text.

Pipeline
--------
    Source → Lexer → Tokens → Parser (+ known types) → StructDecl AST

The AST re-serializes through ``str()``. Shorthand spellings such as
``vec3f`` are normalised to the templated form ``vec3<f32>``.

Usage
-----
>>> from wgsl_struct import parse_struct
>>> s = parse_struct("struct Uniforms { a: bool, b: vec3f }")
>>> print(s)
struct Uniforms {
  a: bool,
  b: vec3<f32>,
}

Structs declared earlier can be used as member types by passing them as
known types:

>>> light = parse_struct("struct Light { color: vec4f }")
>>> scene = parse_struct("struct Scene { lights: array<Light, 4> }", [light])

Supported Grammar
-----------------
- Scalars: bool, i32, u32, f32, f16
- Vectors: vec2/3/4 with <T> or shorthand suffix h, f, i, u
- Matrices: matCxR with <T> or shorthand suffix h, f
- Arrays: array<T, N> and runtime-sized array<T>
- Member attributes: @align(n), @size(n)

Not supported: functions, expressions beyond decimal integer literals,
and semantic validation beyond grammar shape.
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from wgsl_struct.errors import (
    WGSLStructError,
    SourceLocation,
    LexError,
    ParseError,
    UnknownTypeError,
    InvalidShorthandError,
    LayoutError,
)
from wgsl_struct.tokens import Token, TokenKind
from wgsl_struct.lexer import WGSLLexer, tokenize
from wgsl_struct.parser import ParserState, parse_struct, parse_structs
from wgsl_struct.ast import (
    ASTNode,
    ASTVisitor,
    ASTPrinter,
    StructDecl,
    StructMember,
    Identifier,
    IntLiteral,
    AlignAttr,
    SizeAttr,
    ScalarKind,
    ScalarType,
    VectorType,
    MatrixType,
    FixedArrayType,
    RuntimeArrayType,
    StructReference,
)
from wgsl_struct.layout import (
    TypeLayout,
    MemberLayout,
    StructLayout,
    compute_layout,
    type_layout,
)
from wgsl_struct.config import ToolOptions

__all__ = [
    # Version
    "__version__",
    # Main API
    "parse_struct",
    "parse_structs",
    "tokenize",
    "compute_layout",
    "type_layout",
    # Errors
    "WGSLStructError",
    "SourceLocation",
    "LexError",
    "ParseError",
    "UnknownTypeError",
    "InvalidShorthandError",
    "LayoutError",
    # Lexer
    "WGSLLexer",
    "Token",
    "TokenKind",
    # Parser
    "ParserState",
    # AST Nodes
    "ASTNode",
    "ASTVisitor",
    "ASTPrinter",
    "StructDecl",
    "StructMember",
    "Identifier",
    "IntLiteral",
    "AlignAttr",
    "SizeAttr",
    "ScalarKind",
    "ScalarType",
    "VectorType",
    "MatrixType",
    "FixedArrayType",
    "RuntimeArrayType",
    "StructReference",
    # Layout
    "TypeLayout",
    "MemberLayout",
    "StructLayout",
    # Configuration
    "ToolOptions",
]
