"""
WGSL Struct Tool Configuration
==============================

Defaults shared by the command-line tool and library callers. Values can
come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of these)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import logging
import os


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ToolOptions:
    """
    Configuration for parsing struct files.

    Attributes:
        include_files: Files whose structs are registered as known types
            before the main input is parsed (in order)
        log_level: Logging level name for the package loggers
        filename: Name used in diagnostics for text read from stdin
    """

    include_files: List[Path] = field(default_factory=list)
    log_level: str = "WARNING"
    filename: str = "<stdin>"

    @classmethod
    def from_env(cls) -> "ToolOptions":
        """
        Create ToolOptions from environment variables.

        Environment variables (all optional):
            WGSL_STRUCT_INCLUDE: Known-type files, separated by os.pathsep
            WGSL_STRUCT_LOG_LEVEL: Logging level name (e.g., "DEBUG")

        Returns:
            ToolOptions with values from environment variables
        """
        options = cls()

        if include := os.environ.get("WGSL_STRUCT_INCLUDE"):
            options.include_files = [Path(p) for p in include.split(os.pathsep) if p]

        if level := os.environ.get("WGSL_STRUCT_LOG_LEVEL"):
            if level.upper() in LOG_LEVELS:
                options.log_level = level.upper()

        return options

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return getattr(logging, self.log_level, logging.WARNING)
