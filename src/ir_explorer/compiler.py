"""Invoke rustc to produce a textual IR dump of a source snippet."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from ir_explorer.config import CompilerConfig
from ir_explorer.errors import ToolchainError
from ir_explorer.ir_kinds import rustc_flag

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """What rustc produced for one dump kind."""

    success: bool
    ir_output: str
    messages: str

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "ir_output": self.ir_output,
            "messages": self.messages,
        }


def find_toolchain() -> str | None:
    """Search PATH for rustup."""
    return shutil.which("rustup")


def build_command(
    source_path: Path,
    kind: str,
    config: CompilerConfig,
    *,
    rustup: str = "rustup",
) -> list[str]:
    """Build the rustc argv that dumps *kind* for the file at *source_path*."""
    return [
        rustup,
        "run",
        config.toolchain,
        "rustc",
        f"-Zunpretty={rustc_flag(kind)}",
        f"--edition={config.edition}",
        f"--crate-name={config.crate_name}",
        str(source_path),
    ]


def run_rustc(source: str, kind: str, config: CompilerConfig) -> CompileResult:
    """Write *source* to a temp file and run rustc on it.

    Raises ToolchainError if the temp file cannot be written, rustup is
    missing, or rustc times out. A non-zero rustc exit is not an error here:
    it is reported through ``success`` and ``messages``.
    """
    rustup = find_toolchain() or "rustup"

    try:
        fd, name = tempfile.mkstemp(suffix=".rs")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(source)
    except OSError as e:
        raise ToolchainError(f"Failed to write source: {e}")

    tmp = Path(name)
    cmd = build_command(tmp, kind, config, rustup=rustup)
    logger.debug("running %s", " ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            timeout=config.timeout,
        )
    except FileNotFoundError as e:
        raise ToolchainError(f"Failed to run rustc: {e}")
    except subprocess.TimeoutExpired:
        raise ToolchainError(f"Failed to run rustc: timed out after {config.timeout}s")
    finally:
        tmp.unlink(missing_ok=True)

    if result.returncode != 0:
        logger.info("rustc exited %d for kind %s", result.returncode, kind)

    return CompileResult(
        success=result.returncode == 0,
        ir_output=result.stdout.decode("utf-8", errors="replace"),
        messages=result.stderr.decode("utf-8", errors="replace"),
    )


def compile_source(
    source: str,
    kind: str,
    config: CompilerConfig | None = None,
) -> CompileResult:
    """Compile *source* to a *kind* dump. Toolchain failures become messages."""
    config = config or CompilerConfig()
    try:
        return run_rustc(source, kind, config)
    except ToolchainError as e:
        logger.warning("%s", e)
        return CompileResult(success=False, ir_output="", messages=str(e))
