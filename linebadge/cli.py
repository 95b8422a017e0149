import argparse
import asyncio
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from .badges import badge_severity, badge_text
from .config import CONFIG_ENV_VAR, load_config
from .counter import LineCounter
from .errors import IOUnavailable, NotApplicable
from .filters import PathFilter
from .syntax import detect_language
from .version import __version__

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linebadge",
        description="Show line-count badges (total, code, comment, blank) for files.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=f"""
Examples:
  linebadge                          # every eligible file under the current directory
  linebadge src/app.py README.md
  linebadge . --format exact --size-limit 1000000
  {CONFIG_ENV_VAR}=settings.json linebadge .
        """,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"linebadge {__version__}"
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to count (default: .)",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help=f"JSON settings file (default: ${CONFIG_ENV_VAR}, else built-in defaults)",
    )
    parser.add_argument(
        "--size-limit",
        type=int,
        default=None,
        metavar="BYTES",
        help="Files larger than this are estimated instead of classified",
    )
    parser.add_argument(
        "--format",
        choices=["abbreviated", "exact"],
        default=None,
        help="Badge number format",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Count symlinked files instead of skipping them",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging level (default: INFO)",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stdout,
    )


def _iter_files(root: Path, path_filter: PathFilter):
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not path_filter.should_skip_dir(d))
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def _collect(paths: list[str], path_filter: PathFilter) -> tuple[list[Path], list[str]]:
    files: list[Path] = []
    missing: list[str] = []
    for raw in paths:
        # Absolute paths: only directories below each argument are pruned,
        # never the argument's own ancestors.
        p = Path(raw).absolute()
        if p.is_dir():
            files.extend(_iter_files(p, path_filter))
        elif p.exists() or p.is_symlink():
            files.append(p)
        else:
            missing.append(raw)
    return files, missing


def _display(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _print_results(results: dict, counter: LineCounter) -> int:
    config = counter.config
    failures = 0
    log.info("%-8s %-8s %7s %7s %7s  %s", "Lines", "Level", "Code", "Comment", "Blank", "Path")
    log.info("%s", "-" * 60)
    for path, outcome in results.items():
        if isinstance(outcome, NotApplicable):
            log.debug("skipped %s: %s", _display(path), outcome.reason)
            continue
        if isinstance(outcome, IOUnavailable):
            failures += 1
            log.error("error: %s", outcome)
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        lang = detect_language(path) or "-"
        log.info(
            "%-8s %-8s %7s %7s %7s  %s (%s)",
            badge_text(outcome, config),
            badge_severity(outcome.total, config),
            "" if outcome.code is None else outcome.code,
            "" if outcome.comment is None else outcome.comment,
            "" if outcome.blank is None else outcome.blank,
            _display(path),
            lang,
        )
    return failures


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    config = load_config(args.config)
    overrides = {}
    if args.size_limit is not None:
        if args.size_limit < 0:
            parser.error("--size-limit must be >= 0")
        overrides["size_limit"] = args.size_limit
    if args.format is not None:
        overrides["display_format"] = args.format
    if args.follow_symlinks:
        overrides["follow_symlinks"] = True
    if overrides:
        config = replace(config, **overrides)
    if not config.enabled:
        log.info("Line counting is disabled by configuration.")
        return 0

    counter = LineCounter(config)
    files, missing = _collect(args.paths, counter.filter)
    for raw in missing:
        log.error("error: '%s' does not exist", raw)
    if not files:
        log.info("No files found.")
        return 1 if missing else 0

    results = asyncio.run(counter.count_many(files))
    failures = _print_results(results, counter)
    return 1 if (failures or missing) else 0


if __name__ == "__main__":
    sys.exit(main())
