#!/usr/bin/env python3
"""
WGSL Uniform Layout Demo
========================

This script demonstrates how to use the WGSL struct parser to:
1. Parse a struct that other structs will reference
2. Parse a struct using it as a member type
3. Print the canonical source
4. Print the member layout a uniform buffer needs

Usage:
    python examples/uniform_layout_demo.py
"""

from wgsl_struct import parse_struct, ParseError


def main():
    # ==========================================================================
    # 1. Parse the referenced struct first
    # ==========================================================================
    light = parse_struct("""
        struct Light {
            position: vec3f,
            intensity: f32,
            color: vec4<f32>,
        }
    """)

    # ==========================================================================
    # 2. Supply it as a known type
    # ==========================================================================
    frame = parse_struct("""
        struct Frame {
            view_proj: mat4x4f,
            @align(16) time: f32,
            lights: array<Light, 4>,
        }
    """, [light])

    # ==========================================================================
    # 3. Canonical source (shorthands expanded)
    # ==========================================================================
    print(light)
    print(frame)
    print()

    # ==========================================================================
    # 4. Layout: offsets, alignment and sizes
    # ==========================================================================
    print(frame.compute_layout().format_table())
    print()

    # Unknown types are reported with their source location
    try:
        parse_struct("struct Broken { l: Lihgt }", [light], filename="broken.wgsl")
    except ParseError as e:
        print(e)


if __name__ == "__main__":
    main()
