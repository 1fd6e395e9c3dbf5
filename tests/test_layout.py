"""
WGSL Struct Layout Test Suite
=============================

Tests for member offset, alignment and size computation. Expected
values follow the worked examples in the WGSL specification's
"Alignment and Size" section.
"""

import pytest
from wgsl_struct.parser import parse_struct
from wgsl_struct.layout import TypeLayout, compute_layout, round_up, type_layout
from wgsl_struct.errors import LayoutError


def layout_of(source: str, known=()):
    return parse_struct(source, known).compute_layout()


def member_type_layout(type_text: str) -> TypeLayout:
    decl = parse_struct(f"struct S {{ m: {type_text} }}")
    return type_layout(decl.members[0].type)


# =============================================================================
# Type Layout Tests
# =============================================================================

class TestTypeLayout:
    """Alignment and size of individual types."""

    @pytest.mark.parametrize("text,align,size", [
        ("bool", 4, 4),
        ("f16", 2, 2),
        ("vec2f", 8, 8),
        ("vec3f", 16, 12),
        ("vec4f", 16, 16),
        ("vec2h", 4, 4),
        ("vec3h", 8, 6),
        ("vec4h", 8, 8),
        ("mat2x2f", 8, 16),
        ("mat3x3f", 16, 48),
        ("mat4x3f", 16, 64),
        ("mat3x2f", 8, 24),
        ("mat2x3h", 8, 16),
        ("array<f32, 4>", 4, 16),
        ("array<vec3f, 2>", 16, 32),
        ("array<f16, 3>", 2, 6),
    ])
    def test_builtin_types(self, text, align, size):
        assert member_type_layout(text) == TypeLayout(align, size)

    def test_runtime_array(self):
        assert member_type_layout("array<vec2f>") == TypeLayout(8, None)

    def test_zero_length_array(self):
        with pytest.raises(LayoutError):
            member_type_layout("array<f32, 0>")

    def test_non_scalar_vector_component(self):
        with pytest.raises(LayoutError):
            member_type_layout("vec2<vec2f>")

    def test_round_up(self):
        assert round_up(16, 0) == 0
        assert round_up(16, 4) == 16
        assert round_up(4, 8) == 8
        assert round_up(8, 9) == 16


# =============================================================================
# Struct Layout Tests
# =============================================================================

class TestStructLayout:
    """Member placement and struct size."""

    def test_padding_before_vec3(self):
        layout = layout_of("struct A { u: f32, v: f32, w: vec2f, x: f32 }")
        assert [(m.name, m.offset, m.size) for m in layout.members] == [
            ("u", 0, 4), ("v", 4, 4), ("w", 8, 8), ("x", 16, 4),
        ]
        assert layout.align == 8
        assert layout.size == 24

    def test_vec3_followed_by_scalar(self):
        layout = layout_of("struct A { a: vec3f, b: f32 }")
        assert layout.member("b").offset == 12
        assert layout.size == 16

    def test_nested_struct(self):
        inner = parse_struct("struct A { u: f32, v: f32, w: vec2f, x: f32 }")
        layout = layout_of(
            "struct B { a: vec2f, b: vec3f, c: f32, d: f32, e: A, f: vec3f, "
            "g: array<A, 3>, h: i32 }",
            [inner],
        )
        offsets = {m.name: m.offset for m in layout.members}
        assert offsets == {
            "a": 0, "b": 16, "c": 28, "d": 32, "e": 40,
            "f": 64, "g": 80, "h": 152,
        }
        assert layout.align == 16
        assert layout.size == 160

    def test_align_attribute(self):
        layout = layout_of("struct A { a: f32, @align(16) b: f32 }")
        assert layout.member("b").offset == 16
        assert layout.align == 16
        assert layout.size == 32

    def test_size_attribute(self):
        layout = layout_of("struct A { @size(16) a: f32, b: f32 }")
        assert layout.member("a").size == 16
        assert layout.member("b").offset == 16
        assert layout.size == 20

    def test_runtime_array_last(self):
        layout = layout_of("struct A { count: u32, items: array<vec4f> }")
        assert layout.member("items").offset == 16
        assert layout.member("items").size is None
        assert layout.size is None

    def test_compute_layout_function(self):
        decl = parse_struct("struct A { a: f32 }")
        assert compute_layout(decl) == decl.compute_layout()

    def test_member_lookup_missing(self):
        with pytest.raises(KeyError):
            layout_of("struct A { a: f32 }").member("b")

    def test_format_table(self):
        table = layout_of("struct A { a: f32, b: vec3f }").format_table()
        lines = table.splitlines()
        assert lines[0] == "struct A (align 16, size 32)"
        assert lines[2].split() == ["0", "4", "4", "a"]
        assert lines[3].split() == ["16", "16", "12", "b"]


# =============================================================================
# Layout Error Tests
# =============================================================================

class TestLayoutErrors:
    """Invalid layouts raise LayoutError."""

    def test_empty_struct(self):
        with pytest.raises(LayoutError):
            layout_of("struct A {}")

    def test_align_not_power_of_two(self):
        with pytest.raises(LayoutError, match="power of two"):
            layout_of("struct A { @align(12) a: f32 }")

    def test_size_too_small(self):
        with pytest.raises(LayoutError, match="smaller"):
            layout_of("struct A { @size(8) a: vec3f }")

    def test_runtime_array_not_last(self):
        with pytest.raises(LayoutError, match="last member"):
            layout_of("struct A { a: array<f32>, b: f32 }")

    def test_size_on_runtime_array(self):
        with pytest.raises(LayoutError):
            layout_of("struct A { @size(64) a: array<f32> }")

    def test_runtime_sized_struct_as_member(self):
        inner = parse_struct("struct Inner { items: array<f32> }")
        with pytest.raises(LayoutError):
            layout_of("struct Outer { i: Inner }", [inner])
