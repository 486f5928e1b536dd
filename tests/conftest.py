"""Shared pytest fixtures for the IR Explorer test suite."""

from __future__ import annotations

import subprocess

import pytest

from ir_explorer.compiler import find_toolchain


@pytest.fixture
def needs_rustc():
    """Skip test if no nightly rustc is reachable through rustup."""
    rustup = find_toolchain()
    if rustup is None:
        pytest.skip("rustup not available")
    check = subprocess.run(
        [rustup, "run", "nightly", "rustc", "--version"],
        capture_output=True,
    )
    if check.returncode != 0:
        pytest.skip("nightly toolchain not installed")


@pytest.fixture
def nested_dump():
    """A MIR-shaped dump with nested blocks and sparse span annotations."""
    return (
        "fn main() -> () {\n"
        "    let mut _0: ();\n"
        "    scope 1 {\n"
        "        debug x => const 42_i32; // in scope 1 at main.rs:2:9: 2:10\n"
        "    }\n"
        "\n"
        "    bb0: {\n"
        "        return; // scope 0 at main.rs:5:2: 5:2\n"
        "    }\n"
        "}\n"
    )
