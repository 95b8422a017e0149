from __future__ import annotations

from pathlib import Path, PurePosixPath
from types import MappingProxyType

from .models import CommentSyntax

LANG_MAP = {
    ".py": "python", ".pyw": "python", ".pyi": "python", ".pyx": "python",
    ".js": "javascript", ".mjs": "javascript", ".cjs": "javascript",
    ".ts": "typescript", ".tsx": "typescript", ".jsx": "javascript",
    ".mts": "typescript", ".cts": "typescript",
    ".java": "java",
    ".c": "c", ".h": "c",
    ".cpp": "cpp", ".cc": "cpp", ".cxx": "cpp", ".hpp": "cpp", ".hh": "cpp",
    ".m": "objc", ".mm": "objc",
    ".cs": "csharp", ".go": "go", ".rs": "rust", ".rb": "ruby",
    ".php": "php", ".swift": "swift",
    ".kt": "kotlin", ".kts": "kotlin", ".scala": "scala", ".groovy": "groovy",
    ".r": "r",
    ".sh": "bash", ".bash": "bash", ".zsh": "bash", ".fish": "bash",
    ".ps1": "powershell", ".psm1": "powershell",
    ".bat": "batch", ".cmd": "batch",
    ".sql": "sql",
    ".html": "html", ".htm": "html",
    ".css": "css", ".scss": "scss", ".sass": "scss", ".less": "scss",
    ".xml": "xml", ".xsl": "xml", ".xaml": "xml", ".svg": "xml", ".csproj": "xml",
    ".json": "json", ".jsonc": "jsonc", ".yaml": "yaml", ".yml": "yaml",
    ".toml": "toml", ".md": "markdown", ".markdown": "markdown",
    ".ini": "ini", ".cfg": "ini", ".conf": "ini",
    ".dockerfile": "docker", ".lua": "lua",
    ".pl": "perl", ".pm": "perl",
    ".ex": "elixir", ".exs": "elixir",
    ".erl": "erlang", ".hrl": "erlang",
    ".hs": "haskell", ".ml": "ocaml", ".mli": "ocaml",
    ".vim": "vim", ".el": "elisp", ".lisp": "elisp", ".scm": "elisp",
    ".clj": "clojure", ".cljs": "clojure",
    ".dart": "dart", ".v": "v", ".zig": "zig", ".nim": "nim",
    ".tf": "terraform", ".proto": "protobuf",
    ".graphql": "graphql", ".gql": "graphql",
    ".vue": "vue", ".svelte": "svelte",
    ".cmake": "cmake",
}

SPECIAL_NAMES = {
    "dockerfile": "docker",
    "makefile": "makefile",
    "cmakelists.txt": "cmake",
    "rakefile": "ruby",
    "gemfile": "ruby",
    "pipfile": "toml",
    "cargo.toml": "toml",
    ".bashrc": "bash",
    ".zshrc": "bash",
}

_C_STYLE = CommentSyntax(line_comment=("//",), block_comment=(("/*", "*/"),))
_HASH = CommentSyntax(line_comment=("#",))
_MARKUP = CommentSyntax(block_comment=(("<!--", "-->"),))

COMMENT_SYNTAX = {
    "javascript": _C_STYLE, "typescript": _C_STYLE, "java": _C_STYLE,
    "c": _C_STYLE, "cpp": _C_STYLE, "objc": _C_STYLE, "csharp": _C_STYLE,
    "go": _C_STYLE, "rust": _C_STYLE, "swift": _C_STYLE, "kotlin": _C_STYLE,
    "scala": _C_STYLE, "groovy": _C_STYLE, "dart": _C_STYLE, "v": _C_STYLE,
    "protobuf": _C_STYLE, "jsonc": _C_STYLE, "scss": _C_STYLE,
    "zig": CommentSyntax(line_comment=("//",)),
    "php": CommentSyntax(line_comment=("//", "#"), block_comment=(("/*", "*/"),)),
    "css": CommentSyntax(block_comment=(("/*", "*/"),)),
    "python": _HASH, "bash": _HASH, "yaml": _HASH, "toml": _HASH,
    "r": _HASH, "elixir": _HASH, "docker": _HASH, "makefile": _HASH,
    "graphql": _HASH, "cmake": _HASH, "nim": _HASH,
    "terraform": CommentSyntax(line_comment=("#", "//"), block_comment=(("/*", "*/"),)),
    "ruby": CommentSyntax(line_comment=("#",), block_comment=(("=begin", "=end"),)),
    "perl": CommentSyntax(line_comment=("#",), block_comment=(("=pod", "=cut"),)),
    "powershell": CommentSyntax(line_comment=("#",), block_comment=(("<#", "#>"),)),
    "batch": CommentSyntax(line_comment=("rem ", "rem\t", "::"), ignore_case=True),
    "ini": CommentSyntax(line_comment=(";", "#")),
    "html": _MARKUP, "xml": _MARKUP, "markdown": _MARKUP,
    "vue": CommentSyntax(line_comment=("//",), block_comment=(("<!--", "-->"), ("/*", "*/"))),
    "svelte": CommentSyntax(line_comment=("//",), block_comment=(("<!--", "-->"), ("/*", "*/"))),
    "sql": CommentSyntax(line_comment=("--",), block_comment=(("/*", "*/"),)),
    "lua": CommentSyntax(line_comment=("--",), block_comment=(("--[[", "]]"),)),
    "haskell": CommentSyntax(line_comment=("--",), block_comment=(("{-", "-}"),)),
    "elisp": CommentSyntax(line_comment=(";",)),
    "clojure": CommentSyntax(line_comment=(";",)),
    "erlang": CommentSyntax(line_comment=("%",)),
    "ocaml": CommentSyntax(block_comment=(("(*", "*)"),)),
    "vim": CommentSyntax(line_comment=('"',)),
    # No comments in plain JSON, but code/blank is still worth reporting.
    "json": CommentSyntax(),
}

_EMPTY = CommentSyntax()


def normalize_extension(extension: str) -> str:
    ext = extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def detect_language(path_value: str | Path) -> str | None:
    """
    Detect the language id for a path.

    Supports both filenames (Dockerfile, Makefile, ...) and extension mapping.
    Returns None for anything unrecognised.
    """
    if isinstance(path_value, Path):
        name = path_value.name.lower()
        suffix = path_value.suffix.lower()
    else:
        p = PurePosixPath(str(path_value).replace("\\", "/"))
        name = p.name.lower()
        suffix = p.suffix.lower()

    if name in SPECIAL_NAMES:
        return SPECIAL_NAMES[name]
    return LANG_MAP.get(suffix)


class SyntaxRegistry:
    """Read-only extension -> CommentSyntax lookup.

    Safe to share between concurrent callers; nothing mutates after
    construction. Use ``with_extensions`` to derive a registry that also
    classifies extra extensions.
    """

    def __init__(self, extra: dict[str, CommentSyntax] | None = None):
        table = {ext: COMMENT_SYNTAX[lang] for ext, lang in LANG_MAP.items() if lang in COMMENT_SYNTAX}
        for ext, syntax in (extra or {}).items():
            table[normalize_extension(ext)] = syntax
        self._by_ext = MappingProxyType(table)

    def lookup(self, extension: str) -> CommentSyntax | None:
        return self._by_ext.get(normalize_extension(extension))

    def lookup_path(self, path_value: str | Path) -> CommentSyntax | None:
        name = PurePosixPath(str(path_value).replace("\\", "/")).name.lower()
        if name in SPECIAL_NAMES:
            return COMMENT_SYNTAX.get(SPECIAL_NAMES[name])
        suffix = PurePosixPath(name).suffix
        if not suffix:
            return None
        return self.lookup(suffix)

    def with_extensions(self, include: list[str]) -> "SyntaxRegistry":
        extra = dict(self._by_ext)
        for ext in include:
            key = normalize_extension(ext)
            if key and key not in extra:
                extra[key] = _EMPTY
        return SyntaxRegistry(extra)

    def __contains__(self, extension: str) -> bool:
        return normalize_extension(extension) in self._by_ext

    def __len__(self) -> int:
        return len(self._by_ext)
