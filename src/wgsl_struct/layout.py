"""
WGSL Struct Memory Layout
=========================

Computes member offsets, alignment and total size of a parsed struct
following the WGSL host-shareable alignment and size rules.

Alignment and Size Rules
------------------------
| Type              | AlignOf                | SizeOf                         |
|-------------------|------------------------|--------------------------------|
| bool, i32, u32, f32 | 4                    | 4                              |
| f16               | 2                      | 2                              |
| vec2<T>           | 2 * size(T)            | 2 * size(T)                    |
| vec3<T>           | 4 * size(T)            | 3 * size(T)                    |
| vec4<T>           | 4 * size(T)            | 4 * size(T)                    |
| matCxR<T>         | AlignOf(vecR<T>)       | C * roundUp(AlignOf(vecR), SizeOf(vecR)) |
| array<E, N>       | AlignOf(E)             | N * roundUp(AlignOf(E), SizeOf(E)) |
| array<E>          | AlignOf(E)             | determined at runtime          |
| struct S          | max AlignOfMember      | roundUp(AlignOf(S), end of last member) |

Member placement:
    offset(first) = 0
    offset(i)     = roundUp(AlignOfMember(i), offset(i-1) + SizeOfMember(i-1))

@align(n) replaces AlignOfMember and must be a power of two.
@size(n) replaces SizeOfMember and must be at least the natural size.
When an attribute is repeated, the last one applies.

See: https://www.w3.org/TR/WGSL/#alignment-and-size

Example
-------
>>> from wgsl_struct import parse_struct
>>> layout = parse_struct("struct A { a: f32, b: vec3f }").compute_layout()
>>> [(m.name, m.offset) for m in layout.members]
[('a', 0), ('b', 16)]
>>> layout.size
32
"""

import logging
from dataclasses import dataclass
from typing import Optional

from wgsl_struct.errors import LayoutError
from wgsl_struct.ast import (
    StructDecl,
    StructMember,
    AlignAttr,
    SizeAttr,
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
# Layout Results
# =============================================================================

@dataclass(frozen=True)
class TypeLayout:
    """
    Alignment and size of a type.

    Attributes:
        align: Alignment in bytes
        size: Size in bytes, or None for runtime-sized arrays
    """
    align: int
    size: Optional[int]


@dataclass(frozen=True)
class MemberLayout:
    """Placement of one struct member."""
    name: str
    offset: int
    align: int
    size: Optional[int]


@dataclass(frozen=True)
class StructLayout:
    """
    Complete layout of a struct.

    Attributes:
        name: Struct name
        align: Struct alignment (largest member alignment)
        size: Total size including trailing padding, or None when the
            last member is a runtime-sized array
        members: Member placements in declaration order
    """
    name: str
    align: int
    size: Optional[int]
    members: tuple[MemberLayout, ...]

    def member(self, name: str) -> MemberLayout:
        """Return the layout of the first member called name."""
        for member in self.members:
            if member.name == name:
                return member
        raise KeyError(name)

    def format_table(self) -> str:
        """Render the layout as a fixed-width table."""
        lines = [
            f"struct {self.name} (align {self.align}, size {_size_str(self.size)})",
            f"  {'offset':>6}  {'align':>5}  {'size':>7}  name",
        ]
        for m in self.members:
            lines.append(f"  {m.offset:>6}  {m.align:>5}  {_size_str(m.size):>7}  {m.name}")
        return "\n".join(lines)


def _size_str(size: Optional[int]) -> str:
    return "runtime" if size is None else str(size)


# =============================================================================
# Layout Computation
# =============================================================================

def round_up(k: int, n: int) -> int:
    """Smallest multiple of k that is >= n."""
    return -(-n // k) * k


def _is_power_of_two(value: int) -> bool:
    return value > 0 and (value & (value - 1)) == 0


def _scalar(element_type: TypeSpecifier, owner: TypeSpecifier) -> ScalarType:
    if not isinstance(element_type, ScalarType):
        raise LayoutError(f"'{owner}' must have a scalar component type")
    return element_type


def _vector_layout(scalar: ScalarType, size: int) -> TypeLayout:
    s = scalar.size_of
    if size == 2:
        return TypeLayout(2 * s, 2 * s)
    return TypeLayout(4 * s, size * s)


def type_layout(type_spec: TypeSpecifier) -> TypeLayout:
    """
    Compute the alignment and size of a type specifier.

    Raises:
        LayoutError: If the type has no host-shareable layout
    """
    if isinstance(type_spec, ScalarType):
        return TypeLayout(type_spec.align_of, type_spec.size_of)

    if isinstance(type_spec, VectorType):
        return _vector_layout(_scalar(type_spec.element_type, type_spec), type_spec.size)

    if isinstance(type_spec, MatrixType):
        column = _vector_layout(_scalar(type_spec.element_type, type_spec), type_spec.rows)
        stride = round_up(column.align, column.size)
        return TypeLayout(column.align, type_spec.columns * stride)

    if isinstance(type_spec, FixedArrayType):
        element = _element_layout(type_spec)
        count = type_spec.size.value
        if count == 0:
            raise LayoutError(f"'{type_spec}' must have at least one element")
        return TypeLayout(element.align, count * round_up(element.align, element.size))

    if isinstance(type_spec, RuntimeArrayType):
        element = _element_layout(type_spec)
        return TypeLayout(element.align, None)

    if isinstance(type_spec, StructReference):
        nested = compute_layout(type_spec.target)
        if nested.size is None:
            raise LayoutError(
                f"struct '{type_spec.name}' contains a runtime-sized array "
                f"and cannot be used as a member type"
            )
        return TypeLayout(nested.align, nested.size)

    raise LayoutError(f"no layout for type {type(type_spec).__name__}")


def _element_layout(type_spec) -> TypeLayout:
    element = type_layout(type_spec.element_type)
    if element.size is None:
        raise LayoutError(f"'{type_spec}' has a runtime-sized element type")
    return element


def _member_layout(member: StructMember, natural: TypeLayout) -> tuple[int, Optional[int]]:
    """Apply @align/@size overrides to a member's natural layout."""
    align, size = natural.align, natural.size

    for attr in member.attrs:
        if isinstance(attr, AlignAttr):
            value = attr.value.value
            if not _is_power_of_two(value):
                raise LayoutError(
                    f"@align({value}) on member '{member.name}' is not a power of two"
                )
            align = value
        elif isinstance(attr, SizeAttr):
            value = attr.value.value
            if natural.size is None:
                raise LayoutError(
                    f"@size cannot be applied to runtime-sized member '{member.name}'"
                )
            if value < natural.size:
                raise LayoutError(
                    f"@size({value}) on member '{member.name}' is smaller than "
                    f"its type size {natural.size}"
                )
            size = value

    return align, size


def compute_layout(decl: StructDecl) -> StructLayout:
    """
    Compute the memory layout of a struct declaration.

    Args:
        decl: Parsed struct declaration

    Returns:
        StructLayout with member offsets and total size

    Raises:
        LayoutError: If the struct is empty, an attribute is invalid, or a
            runtime-sized array is not the last member
    """
    if not decl.members:
        raise LayoutError(f"struct '{decl.name}' has no members")

    members: list[MemberLayout] = []
    end = 0
    struct_align = 1
    last_index = len(decl.members) - 1

    for index, member in enumerate(decl.members):
        align, size = _member_layout(member, type_layout(member.type))
        if size is None and index != last_index:
            raise LayoutError(
                f"runtime-sized member '{member.name}' must be the last member "
                f"of struct '{decl.name}'"
            )

        offset = round_up(align, end)
        members.append(MemberLayout(member.name.value, offset, align, size))
        struct_align = max(struct_align, align)
        end = offset + (size or 0)

    runtime_sized = members[-1].size is None
    total = None if runtime_sized else round_up(struct_align, end)

    logger.debug(
        f"Layout of struct '{decl.name}': align {struct_align}, size {_size_str(total)}"
    )
    return StructLayout(decl.name.value, struct_align, total, tuple(members))
