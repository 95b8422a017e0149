from __future__ import annotations

import fnmatch
import math
import os
import re
import stat as stat_mod
from pathlib import Path, PurePosixPath

from .models import FileMetadata

BINARY_SNIFF_BYTES = 8192
ESTIMATE_SAMPLE_BYTES = 64 * 1024


def normalize_posix_path(rel_path: str | Path) -> str:
    """
    Normalize a path to a posix-style string (forward slashes).

    Used as the cache key and for directory exclusion matching, so the same
    file always maps to the same entry regardless of how it was spelled.
    """
    if isinstance(rel_path, Path):
        rel_path = str(rel_path)
    # PurePosixPath does not treat backslashes as separators, so normalize first.
    rel_path = rel_path.replace("\\", "/")
    return str(PurePosixPath(rel_path))


def compile_name_matcher(patterns: list[str]):
    """
    Compile glob patterns for single path components into one case-insensitive matcher.

    Plain names (``node_modules``) match exactly; globs (``*.egg-info``) work too.
    Returns a callable: matcher(name: str) -> bool
    """
    lowered = [p.strip().strip("/").lower() for p in patterns if p and p.strip().strip("/")]
    if not lowered:
        return lambda _name: False

    exact = {p for p in lowered if not any(ch in p for ch in "*?[")}
    globs = [p for p in lowered if p not in exact]
    glob_re = None
    if globs:
        glob_re = re.compile("|".join(f"(?:{fnmatch.translate(p)})" for p in globs))

    def _match(name: str) -> bool:
        lower = name.lower()
        if lower in exact:
            return True
        return bool(glob_re and glob_re.match(lower))

    return _match


def is_probably_text(blob: bytes, sample: int = BINARY_SNIFF_BYTES) -> bool:
    return b"\x00" not in blob[:sample]


def line_count_from_bytes(blob: bytes) -> int:
    if not blob:
        return 0
    n = blob.count(b"\n")
    if not blob.endswith(b"\n"):
        n += 1
    return n


def estimate_line_count(size_bytes: int, sample: bytes) -> int:
    """
    Estimate total lines of a file from a leading sample.

    Scales the sample's newline density up to the full size and rounds up.
    A sample without any newline is treated as a single long line. The
    result is stable for a given (size, sample) pair.
    """
    if size_bytes <= 0:
        return 0
    if not sample:
        return 1
    if len(sample) >= size_bytes:
        return line_count_from_bytes(sample[:size_bytes])
    newlines = sample.count(b"\n")
    if newlines == 0:
        return 1
    return max(1, math.ceil(size_bytes * newlines / len(sample)))


def decode_text(blob: bytes) -> str | None:
    """Decode UTF-8 content (BOM tolerated); None means "not text"."""
    if not is_probably_text(blob):
        return None
    try:
        return blob.decode("utf-8-sig")
    except UnicodeDecodeError:
        return None


class LocalFileSystem:
    """Stat/read access to the local disk.

    All methods are blocking and raise ``OSError``; callers run them off the
    event loop and translate failures.
    """

    def stat(self, filepath: str | Path) -> FileMetadata:
        lst = os.lstat(filepath)
        is_symlink = stat_mod.S_ISLNK(lst.st_mode)
        st = lst
        if is_symlink:
            try:
                st = os.stat(filepath)
            except OSError:
                # Dangling link: report the link itself, which is not a regular file.
                pass
        return FileMetadata(
            size_bytes=int(st.st_size),
            mtime_ms=st.st_mtime_ns / 1_000_000,
            is_file=stat_mod.S_ISREG(st.st_mode),
            is_symlink=is_symlink,
        )

    def read_bytes(self, filepath: str | Path) -> bytes:
        return Path(filepath).read_bytes()

    def read_sample(self, filepath: str | Path, sample_size: int = ESTIMATE_SAMPLE_BYTES) -> bytes:
        with Path(filepath).open("rb") as f:
            return f.read(sample_size)
