from __future__ import annotations

from pathlib import Path, PurePosixPath

from .config import LineCountConfig
from .file_utils import compile_name_matcher, normalize_posix_path
from .syntax import normalize_extension


class PathFilter:
    """Decides which paths are eligible for a badge at all.

    A path is rejected when one of its directory components below ``root``
    matches ``excludeDirectories``, or its extension is listed in
    ``excludeExtensions``. Relative paths are taken as relative to ``root``.
    Ancestors of an absolute path outside ``root`` (or with no root set) are
    never matched, so a project living under /srv/build/ is still counted.
    Everything else is eligible; paths with an unrecognised extension still
    get a total-only count.
    """

    def __init__(self, config: LineCountConfig, root: str | Path | None = None):
        self.root = PurePosixPath(normalize_posix_path(root)) if root is not None else None
        self._dir_match = compile_name_matcher(list(config.exclude_directories))
        self._excluded_ext = {normalize_extension(e) for e in config.exclude_extensions if e.strip()}

    def should_skip_dir(self, dirname: str) -> bool:
        return self._dir_match(dirname)

    def rejection_reason(self, path: str | Path) -> str | None:
        p = PurePosixPath(normalize_posix_path(path))
        for part in self._dirs_below_root(p):
            if self._dir_match(part):
                return f"inside excluded directory '{part}'"
        if p.suffix and normalize_extension(p.suffix) in self._excluded_ext:
            return f"extension '{p.suffix}' is excluded"
        return None

    def _dirs_below_root(self, p: PurePosixPath) -> tuple[str, ...]:
        if self.root is not None:
            try:
                return p.relative_to(self.root).parts[:-1]
            except ValueError:
                pass
        if p.is_absolute():
            return ()
        return p.parts[:-1]

    def is_eligible(self, path: str | Path) -> bool:
        return self.rejection_reason(path) is None
