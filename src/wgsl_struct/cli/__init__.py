"""
WGSL Struct Command-Line Interface
==================================

This package provides the command-line tool for the WGSL struct parser:

- **wgslstruct**: parse struct declarations and print canonical source,
  an AST dump, or member layout tables

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["wgslstruct"]
