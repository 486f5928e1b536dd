"""Exception types raised outside the pure span engine."""

from __future__ import annotations


class IrExplorerError(Exception):
    """Base class for explorer errors."""


class ToolchainError(IrExplorerError):
    """Raised when rustc cannot be run or does not finish."""

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__(message)


class ConfigError(IrExplorerError):
    """Raised when irx.toml holds a value of the wrong type."""

    def __init__(self, section: str, key: str, expected: type, value: object) -> None:
        self.section = section
        self.key = key
        super().__init__(
            f"[{section}] {key}: expected {expected.__name__}, "
            f"got {type(value).__name__} ({value!r})"
        )
