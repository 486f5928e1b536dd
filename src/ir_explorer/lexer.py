"""Pygments lexer for rustc -Zunpretty IR dumps (HIR, THIR, MIR, AST trees)."""

from pygments.lexer import RegexLexer, words
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)


class RustIrLexer(RegexLexer):
    """Pygments lexer for textual rustc IR dumps."""

    name = "Rust IR"
    aliases = ["rust-ir", "mir", "hir"]
    filenames = ["*.mir", "*.hir", "*.thir"]
    mimetypes = ["text/x-rust-ir"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Source span annotations (main.rs:3:5: 5:10)
            (r"[^\s:]+\.rs:\d+:\d+(?:: \d+:\d+)?", Comment.Special),
            # Syntax context markers (#0)
            (r"\(#\d+\)", Comment.Special),
            # Line comments, including MIR scope comments
            (r"//.*$", Comment.Single),
            (r"/\*[\s\S]*?\*/", Comment.Multiline),
            # Strings and chars
            (r'b?"', String, "string"),
            (r"b?'(\\.|[^\\'])'", String.Char),
            # Lifetimes and regions
            (r"'[a-zA-Z_]\w*", Name.Decorator),
            # Numbers with optional type suffix
            (r"0x[0-9a-fA-F_]+(_?[iu](8|16|32|64|128|size))?", Number.Hex),
            (r"[0-9][0-9_]*\.[0-9][0-9_]*(_?f(32|64))?", Number.Float),
            (r"[0-9][0-9_]*(_?[iu](8|16|32|64|128|size))?", Number.Integer),
            # MIR locals and basic blocks
            (r"\b_\d+\b", Name.Variable),
            (r"\bbb\d+\b", Name.Label),
            # MIR statements and terminators
            (
                words(
                    (
                        "StorageLive", "StorageDead", "FakeRead", "Retag",
                        "Deinit", "PlaceMention", "AscribeUserType",
                        "goto", "switchInt", "return", "unreachable",
                        "drop", "assert", "call", "resume", "abort",
                        "unwind", "continue", "cleanup", "terminate",
                        "scope", "debug", "otherwise",
                    ),
                    prefix=r"\b",
                    suffix=r"\b",
                ),
                Keyword.Pseudo,
            ),
            # Operand kinds
            (words(("move", "copy", "const"), prefix=r"\b", suffix=r"\b"), Keyword.Reserved),
            # Rust keywords
            (
                words(
                    (
                        "as", "async", "await", "box", "break", "crate", "dyn",
                        "else", "enum", "extern", "fn", "for", "if", "impl",
                        "in", "let", "loop", "match", "mod", "mut", "pub",
                        "ref", "static", "struct", "super", "trait", "type",
                        "unsafe", "use", "where", "while", "yield",
                    ),
                    prefix=r"\b",
                    suffix=r"\b",
                ),
                Keyword,
            ),
            (r"\b(true|false)\b", Keyword.Constant),
            (r"\b(self|Self)\b", Name.Builtin.Pseudo),
            # Primitive types
            (
                words(
                    (
                        "i8", "i16", "i32", "i64", "i128", "isize",
                        "u8", "u16", "u32", "u64", "u128", "usize",
                        "f32", "f64", "bool", "char", "str",
                    ),
                    prefix=r"\b",
                    suffix=r"\b",
                ),
                Keyword.Type,
            ),
            # Attributes and macros
            (r"#!?\[[^\]]*\]", Name.Decorator),
            (r"[a-z_][a-zA-Z0-9_]*!", Name.Function.Magic),
            # Paths and names
            (r"[A-Z][a-zA-Z0-9_]*", Name.Class),
            (r"[a-z_][a-zA-Z0-9_]*(?=\s*\()", Name.Function),
            (r"[a-z_][a-zA-Z0-9_]*(?=\s*:(?!:))", Name.Attribute),
            (r"[a-z_][a-zA-Z0-9_]*", Name),
            # Operators
            (r"::|->|=>|==|!=|<=|>=|&&|\|\||\.\.=?", Operator),
            (r"[+\-*/%<>=!&|^.@?#$~]", Operator),
            # Punctuation
            (r"[(),;\[\]{}:]", Punctuation),
        ],
        "string": [
            (r'\\[nrt\\"\'0]|\\x[0-9a-fA-F]{2}|\\u\{[0-9a-fA-F]+\}', String.Escape),
            (r'[^"\\]+', String),
            (r'"', String, "#pop"),
        ],
    }
