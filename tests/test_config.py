"""
Tool Configuration Tests
========================

Tests for ToolOptions defaults and environment overrides.
"""

import logging
import os
from pathlib import Path

from wgsl_struct.config import ToolOptions


class TestToolOptions:
    """Tests for ToolOptions."""

    def test_defaults(self):
        options = ToolOptions()
        assert options.include_files == []
        assert options.log_level == "WARNING"
        assert options.log_level_value == logging.WARNING
        assert options.filename == "<stdin>"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WGSL_STRUCT_INCLUDE", os.pathsep.join(["a.wgsl", "b.wgsl"]))
        monkeypatch.setenv("WGSL_STRUCT_LOG_LEVEL", "debug")
        options = ToolOptions.from_env()
        assert options.include_files == [Path("a.wgsl"), Path("b.wgsl")]
        assert options.log_level == "DEBUG"
        assert options.log_level_value == logging.DEBUG

    def test_invalid_log_level_ignored(self, monkeypatch):
        monkeypatch.delenv("WGSL_STRUCT_INCLUDE", raising=False)
        monkeypatch.setenv("WGSL_STRUCT_LOG_LEVEL", "loud")
        options = ToolOptions.from_env()
        assert options.log_level == "WARNING"
        assert options.include_files == []

    def test_instances_do_not_share_lists(self):
        first = ToolOptions()
        first.include_files.append(Path("x.wgsl"))
        assert ToolOptions().include_files == []
