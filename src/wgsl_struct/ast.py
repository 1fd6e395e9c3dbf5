"""
WGSL Struct Abstract Syntax Tree (AST) Definitions
==================================================

This module defines the AST node types produced by the struct parser.
Every node is an immutable value and renders itself back to canonical
WGSL source text through ``str()``.

Node Hierarchy
--------------
ASTNode (base)
├── StructDecl - struct Name { members }
├── StructMember - [attrs] name: type
├── Attributes
│   ├── AlignAttr - @align(n)
│   └── SizeAttr - @size(n)
├── Type specifiers
│   ├── ScalarType - bool, i32, u32, f32, f16
│   ├── VectorType - vecN<T>
│   ├── MatrixType - matCxR<T>
│   ├── FixedArrayType - array<T,N>
│   ├── RuntimeArrayType - array<T>
│   └── StructReference - name of a previously parsed struct
├── Identifier
└── IntLiteral

Design Notes
------------
- All nodes are frozen dataclasses; sequences are stored as tuples
- Equality is structural, so re-parsing canonical text yields an equal tree
- StructReference holds the referenced StructDecl itself, never a copy
- Shorthand spellings (vec3f, mat2x2h) are normalised to the templated
  form on output
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Nodes perform no I/O and are never mutated after construction.
    """
    pass


# =============================================================================
# Leaf Nodes
# =============================================================================

@dataclass(frozen=True)
class Identifier(ASTNode):
    """A name: struct name or member name."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntLiteral(ASTNode):
    """
    Non-negative decimal integer literal.

    Only plain decimal integers are supported; an ``i`` or ``u`` suffix
    is accepted on input and dropped on output.
    """
    value: int

    @classmethod
    def from_text(cls, text: str) -> "IntLiteral":
        """Parse literal text such as '16', '0u' or '4i'."""
        if text[-1:] in ("i", "u"):
            text = text[:-1]
        return cls(int(text, 10))

    def __str__(self) -> str:
        return str(self.value)


# =============================================================================
# Attributes
# =============================================================================

@dataclass(frozen=True)
class AlignAttr(ASTNode):
    """@align(n) member attribute."""
    value: IntLiteral

    def __str__(self) -> str:
        return f"@align({self.value})"


@dataclass(frozen=True)
class SizeAttr(ASTNode):
    """@size(n) member attribute."""
    value: IntLiteral

    def __str__(self) -> str:
        return f"@size({self.value})"


Attribute = Union[AlignAttr, SizeAttr]


# =============================================================================
# Type Specifiers
# =============================================================================

class ScalarKind(str, Enum):
    """The WGSL scalar types."""
    BOOL = "bool"
    I32 = "i32"
    U32 = "u32"
    F32 = "f32"
    F16 = "f16"

    def __str__(self) -> str:
        return self.value


# See: https://www.w3.org/TR/WGSL/#alignment-and-size
# kind -> (alignment, size) in bytes
SCALAR_LAYOUT: dict[ScalarKind, tuple[int, int]] = {
    ScalarKind.BOOL: (4, 4),
    ScalarKind.I32: (4, 4),
    ScalarKind.U32: (4, 4),
    ScalarKind.F32: (4, 4),
    ScalarKind.F16: (2, 2),
}


@dataclass(frozen=True)
class ScalarType(ASTNode):
    """
    Scalar type specifier.

    Attributes:
        kind: Which scalar type this is
    """
    kind: ScalarKind

    def __post_init__(self):
        object.__setattr__(self, "kind", ScalarKind(self.kind))

    def __str__(self) -> str:
        return self.kind.value

    @property
    def align_of(self) -> int:
        """Alignment in bytes."""
        return SCALAR_LAYOUT[self.kind][0]

    @property
    def size_of(self) -> int:
        """Size in bytes."""
        return SCALAR_LAYOUT[self.kind][1]


@dataclass(frozen=True)
class VectorType(ASTNode):
    """
    Vector type specifier: vecN<T>.

    Attributes:
        element_type: Component type
        size: Number of components (2, 3 or 4)
    """
    element_type: "TypeSpecifier"
    size: int

    def __str__(self) -> str:
        return f"vec{self.size}<{self.element_type}>"


@dataclass(frozen=True)
class MatrixType(ASTNode):
    """
    Matrix type specifier: matCxR<T>.

    WGSL names matrices column-count first, so mat2x3 has 2 columns of
    vec3 each.

    Attributes:
        element_type: Component type
        columns: Number of columns (2, 3 or 4)
        rows: Number of rows (2, 3 or 4)
    """
    element_type: "TypeSpecifier"
    columns: int
    rows: int

    def __str__(self) -> str:
        return f"mat{self.columns}x{self.rows}<{self.element_type}>"


@dataclass(frozen=True)
class FixedArrayType(ASTNode):
    """Fixed-size array type specifier: array<T,N>."""
    element_type: "TypeSpecifier"
    size: IntLiteral

    def __str__(self) -> str:
        return f"array<{self.element_type},{self.size}>"


@dataclass(frozen=True)
class RuntimeArrayType(ASTNode):
    """Runtime-sized array type specifier: array<T>."""
    element_type: "TypeSpecifier"

    def __str__(self) -> str:
        return f"array<{self.element_type}>"


@dataclass(frozen=True)
class StructReference(ASTNode):
    """
    Member type naming a previously parsed struct.

    The target is resolved once, at parse time, from the known types the
    caller supplied. It is the caller's StructDecl object itself.
    """
    target: "StructDecl"

    @property
    def name(self) -> str:
        return self.target.name.value

    def __str__(self) -> str:
        return self.name


TypeSpecifier = Union[
    ScalarType,
    VectorType,
    MatrixType,
    FixedArrayType,
    RuntimeArrayType,
    StructReference,
]


# =============================================================================
# Declarations
# =============================================================================

@dataclass(frozen=True)
class StructMember(ASTNode):
    """
    Struct member declaration.

    Attributes:
        name: Member name
        type: Member type specifier
        attrs: Leading @align/@size attributes, in source order
    """
    name: Identifier
    type: TypeSpecifier
    attrs: tuple[Attribute, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "attrs", tuple(self.attrs))

    def __str__(self) -> str:
        prefix = "".join(f"{attr} " for attr in self.attrs)
        return f"{prefix}{self.name}: {self.type},"


@dataclass(frozen=True)
class StructDecl(ASTNode):
    """
    Root node: a complete struct declaration.

    Member names are not checked for uniqueness.

    Attributes:
        name: Struct name
        members: Members in source order
    """
    name: Identifier
    members: tuple[StructMember, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))

    def __str__(self) -> str:
        body = "".join(f"  {member}\n" for member in self.members)
        return f"struct {self.name} {{\n{body}}}"

    def compute_layout(self):
        """
        Compute member offsets, alignment and total size.

        Returns:
            StructLayout for this declaration

        Raises:
            LayoutError: If an attribute value or member placement is invalid
        """
        from wgsl_struct.layout import compute_layout
        return compute_layout(self)


# =============================================================================
# AST Visitor
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches to visit_<ClassName> methods. Subclasses override the
    methods for node types they care about.

    Usage:
        class MemberCounter(ASTVisitor):
            def visit_StructDecl(self, node):
                return len(node.members)
    """

    def visit(self, node: ASTNode) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> Any:
        """Called for nodes without a specific visitor method."""
        return None


class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Produces an indented, human-readable dump of the tree structure.

    Usage:
        printer = ASTPrinter()
        output = printer.print(ast)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _nested(self, label: str, child: ASTNode) -> None:
        self._emit(label)
        self.indent_level += 1
        self.visit(child)
        self.indent_level -= 1

    def visit_StructDecl(self, node: StructDecl):
        self._emit(f"Struct: {node.name}")
        self.indent_level += 1
        for member in node.members:
            self.visit(member)
        self.indent_level -= 1

    def visit_StructMember(self, node: StructMember):
        self._emit(f"Member: {node.name}")
        self.indent_level += 1
        for attr in node.attrs:
            self.visit(attr)
        self.visit(node.type)
        self.indent_level -= 1

    def visit_AlignAttr(self, node: AlignAttr):
        self._emit(f"Align: {node.value}")

    def visit_SizeAttr(self, node: SizeAttr):
        self._emit(f"Size: {node.value}")

    def visit_ScalarType(self, node: ScalarType):
        self._emit(f"Scalar: {node.kind.value}")

    def visit_VectorType(self, node: VectorType):
        self._nested(f"Vector: {node.size}", node.element_type)

    def visit_MatrixType(self, node: MatrixType):
        self._nested(f"Matrix: {node.columns}x{node.rows}", node.element_type)

    def visit_FixedArrayType(self, node: FixedArrayType):
        self._nested(f"Array: {node.size}", node.element_type)

    def visit_RuntimeArrayType(self, node: RuntimeArrayType):
        self._nested("Array: runtime-sized", node.element_type)

    def visit_StructReference(self, node: StructReference):
        self._emit(f"StructRef: {node.name}")

    def generic_visit(self, node: ASTNode):
        self._emit(f"<{type(node).__name__}>")
