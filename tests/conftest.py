"""
Shared Test Configuration and Fixtures

Provides sample source trees and configuration objects used across the
test suite.
"""

import os
from pathlib import Path
from typing import Dict

import pytest

from gitcontext.core.config.models import AppConfig, OutputConfig


def write_tree(root: Path, files: Dict[str, bytes]) -> Path:
    """Create ``files`` (relative path -> bytes) below ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


@pytest.fixture
def sample_repo(tmp_path):
    """A small source tree with text, binary and excluded content."""
    return write_tree(tmp_path / "repo", {
        "README.md": b"# Sample\n",
        "src/main.py": b"print('hello')\n",
        "src/util/helpers.py": b"def helper():\n    return 1\n",
        "src/cache.tmp": b"scratch",
        "node_modules/pkg/index.js": b"module.exports = {};\n",
        "assets/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR",
        ".gitignore": b"*.tmp\n",
        "Makefile": b"all:\n\techo ok\n",
    })


@pytest.fixture
def plain_config(tmp_path):
    """Configuration that renders name, size and content and writes under tmp_path."""
    return AppConfig(
        template="#file_name:#file_size:#file_content",
        output=OutputConfig(path=tmp_path / "out" / "context.txt"),
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove GITCONTEXT_* variables so the host environment cannot leak in."""
    for key in list(os.environ):
        if key.startswith("GITCONTEXT_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run the test from an empty working directory with no config files."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return workdir
