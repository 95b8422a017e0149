"""Line-count badges for project files.

Counts total, code, comment and blank lines per file, caching each result
against the file's size and modification time so unchanged files are never
re-read.
"""

from .classifier import classify
from .config import LineCountConfig, load_config
from .counter import LineCounter
from .errors import IOUnavailable, LineCountError, NotApplicable
from .models import CacheEntry, CommentParseResult, CommentSyntax, FileMetadata, LineCountResult
from .syntax import SyntaxRegistry
from .version import __version__

__all__ = [
    "CacheEntry",
    "CommentParseResult",
    "CommentSyntax",
    "FileMetadata",
    "IOUnavailable",
    "LineCountConfig",
    "LineCountError",
    "LineCountResult",
    "LineCounter",
    "NotApplicable",
    "SyntaxRegistry",
    "classify",
    "load_config",
    "__version__",
]
