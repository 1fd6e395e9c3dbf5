"""
wgslstruct - WGSL Struct Command-Line Interface
===============================================

Parses the struct declarations in a WGSL source file and prints them in
canonical form, as an AST dump, or as member layout tables.

Usage Examples
--------------
Normalise a file of struct declarations:
    $ wgslstruct structs.wgsl

Reference structs declared in another file:
    $ wgslstruct -I common.wgsl scene.wgsl

Show member offsets and sizes:
    $ wgslstruct --layout uniforms.wgsl

Read from stdin:
    $ echo "struct A { a: vec3f }" | wgslstruct -
"""

import logging
from pathlib import Path
from typing import Optional

import click

from wgsl_struct import __version__
from wgsl_struct.ast import ASTPrinter, StructDecl
from wgsl_struct.config import ToolOptions
from wgsl_struct.parser import parse_structs
from wgsl_struct.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(options: ToolOptions, verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else options.log_level_value
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def load_known_types(paths: list[Path]) -> list[StructDecl]:
    """Parse include files in order; each may use structs from earlier ones."""
    known: list[StructDecl] = []
    for path in paths:
        decls = parse_structs(path.read_text(), known, filename=str(path))
        logger.debug(f"Loaded {len(decls)} known types from {path}")
        known.extend(decls)
    return known


def render(decls: list[StructDecl], ast: bool, layout: bool) -> str:
    """Render parsed declarations in the requested form."""
    if ast:
        printer = ASTPrinter()
        blocks = [printer.print(decl) for decl in decls]
    elif layout:
        blocks = [decl.compute_layout().format_table() for decl in decls]
    else:
        blocks = [str(decl) for decl in decls]
    return "\n\n".join(blocks)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write output to a file instead of stdout",
)
@click.option(
    "-I", "--include",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File of structs usable as member types (can be repeated)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "--layout",
    is_flag=True,
    help="Print member offsets, alignment and sizes",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="wgslstruct")
def main(
    input_file: Path,
    output: Optional[Path],
    include: tuple[Path, ...],
    ast: bool,
    layout: bool,
    verbose: bool,
) -> None:
    """
    Parse WGSL struct declarations.

    INPUT_FILE holds one or more struct declarations ("-" reads stdin).
    Each struct may use structs declared before it, and structs from
    --include files, as member types.

    \b
    Examples:
        wgslstruct structs.wgsl             # Canonical source
        wgslstruct -I common.wgsl a.wgsl    # Add known types
        wgslstruct --layout a.wgsl          # Offsets and sizes
        wgslstruct --ast a.wgsl             # Tree dump
    """
    options = ToolOptions.from_env()
    options.include_files.extend(include)
    setup_logging(options, verbose)

    try:
        known = load_known_types(options.include_files)

        if str(input_file) == "-":
            source = click.get_text_stream("stdin").read()
            filename = options.filename
        else:
            source = input_file.read_text()
            filename = str(input_file)

        decls = parse_structs(source, known, filename=filename)
        text = render(decls, ast=ast, layout=layout)

        if output is None:
            click.echo(text)
        else:
            output.write_text(text + "\n")
            if verbose:
                click.echo(f"Wrote {len(decls)} structs to {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
