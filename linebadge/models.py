from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileMetadata:
    size_bytes: int
    mtime_ms: float
    is_file: bool
    is_symlink: bool = False


@dataclass(frozen=True)
class CommentSyntax:
    line_comment: tuple[str, ...] = ()
    block_comment: tuple[tuple[str, str], ...] = ()
    # Markers are given in lower case and matched against ASCII-lowered lines.
    ignore_case: bool = False


@dataclass
class CommentParseResult:
    code: int = 0
    comment: int = 0
    blank: int = 0

    @property
    def total(self) -> int:
        return self.code + self.comment + self.blank


@dataclass(frozen=True)
class LineCountResult:
    total: int
    estimated: bool = False
    code: int | None = None
    comment: int | None = None
    blank: int | None = None

    @classmethod
    def from_parse(cls, parsed: CommentParseResult) -> "LineCountResult":
        return cls(
            total=parsed.total,
            estimated=False,
            code=parsed.code,
            comment=parsed.comment,
            blank=parsed.blank,
        )

    @property
    def has_breakdown(self) -> bool:
        return self.code is not None


@dataclass
class CacheEntry:
    result: LineCountResult
    mtime_ms: float
    size_bytes: int

    def matches(self, meta: FileMetadata) -> bool:
        return self.mtime_ms == meta.mtime_ms and self.size_bytes == meta.size_bytes
