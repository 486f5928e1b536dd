"""TOML config loading for irx.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ir_explorer.errors import ConfigError

CONFIG_NAME = "irx.toml"


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000
    static_dir: str = ""


@dataclass
class CompilerConfig:
    toolchain: str = "nightly"
    edition: str = "2021"
    crate_name: str = "input"
    timeout: int = 60


@dataclass
class RenderConfig:
    language: str = "rust-ir"
    style: str = "default"
    default_kind: str = "hir"


@dataclass
class ExplorerConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find irx.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def _get(table: dict, section: str, key: str, default: object) -> object:
    value = table.get(key, default)
    expected = type(default)
    # bool is an int subclass; a port of `true` is still wrong
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigError(section, key, expected, value)
    return value


def load_config(path: Path) -> ExplorerConfig:
    """Parse an irx.toml file into an ExplorerConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = ExplorerConfig()

    if "server" in data:
        srv = data["server"]
        defaults = ServerConfig()
        config.server = ServerConfig(
            host=_get(srv, "server", "host", defaults.host),
            port=_get(srv, "server", "port", defaults.port),
            static_dir=_get(srv, "server", "static_dir", defaults.static_dir),
        )

    if "compiler" in data:
        cmp = data["compiler"]
        defaults = CompilerConfig()
        config.compiler = CompilerConfig(
            toolchain=_get(cmp, "compiler", "toolchain", defaults.toolchain),
            edition=str(cmp.get("edition", defaults.edition)),
            crate_name=_get(cmp, "compiler", "crate_name", defaults.crate_name),
            timeout=_get(cmp, "compiler", "timeout", defaults.timeout),
        )

    if "render" in data:
        rnd = data["render"]
        defaults = RenderConfig()
        config.render = RenderConfig(
            language=_get(rnd, "render", "language", defaults.language),
            style=_get(rnd, "render", "style", defaults.style),
            default_kind=_get(rnd, "render", "default_kind", defaults.default_kind),
        )

    return config


def load_or_default(start_path: Path | None = None) -> ExplorerConfig:
    """Load the nearest irx.toml, or return the defaults if there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return ExplorerConfig()
