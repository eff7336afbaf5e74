"""Shared test fixtures for module-zero."""

import shutil
from pathlib import Path

import pytest

from module_zero.blocks.styles import derive_delimiters
from module_zero.config import load_config

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def hash_delims():
    return derive_delimiters("#! m0")


@pytest.fixture
def js_delims():
    return derive_delimiters("/*! m0 */")


@pytest.fixture
def base(tmp_path):
    """Writable copy of the base package fixture."""
    dest = tmp_path / "base"
    shutil.copytree(FIXTURES / "base-package", dest)
    return dest


@pytest.fixture
def target(tmp_path):
    """Writable copy of the dependent package fixture."""
    dest = tmp_path / "target"
    shutil.copytree(FIXTURES / "dependent-package", dest)
    return dest


@pytest.fixture
def config(base):
    return load_config(base / "module-zero.yaml")
