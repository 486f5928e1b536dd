"""The -Zunpretty dump kinds the explorer will ask rustc for."""

from __future__ import annotations

VALID_KINDS = (
    "normal",
    "identified",
    "expanded",
    "expanded,identified",
    "expanded,hygiene",
    "ast-tree",
    "ast-tree,expanded",
    "hir",
    "hir,identified",
    "hir,typed",
    "hir-tree",
    "thir-tree",
    "thir-flat",
    "mir",
    "stable-mir",
    "mir-cfg",
)

DEFAULT_KIND = "hir"


def rustc_flag(kind: str) -> str:
    """Return *kind* if rustc accepts it, otherwise the default kind."""
    return kind if kind in VALID_KINDS else DEFAULT_KIND
