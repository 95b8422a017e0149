from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

log = logging.getLogger(__name__)

CONFIG_SECTION = "lineCounter"
CONFIG_ENV_VAR = "LINEBADGE_CONFIG"

DEFAULT_EXCLUDE_DIRECTORIES = [
    "node_modules", ".git", "dist", "build", "out", "bin", "obj",
    ".vscode", ".idea", "vendor", "coverage", ".next", ".nuxt",
    "target", ".cache",
]

DISPLAY_FORMATS = ("abbreviated", "exact")


@dataclass(frozen=True)
class LineCountConfig:
    enabled: bool = True
    exclude_directories: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_EXCLUDE_DIRECTORIES))
    size_limit: int = 5_000_000
    debounce_delay: int = 300
    warning_threshold: int = 500
    error_threshold: int = 1000
    show_status_bar: bool = True
    display_format: str = "abbreviated"
    include_extensions: tuple[str, ...] = ()
    exclude_extensions: tuple[str, ...] = ()
    follow_symlinks: bool = False

    @classmethod
    def from_mapping(cls, data: dict, section: str = CONFIG_SECTION) -> "LineCountConfig":
        """
        Build a config from settings-style data.

        Accepts camelCase keys either flat (``{"sizeLimit": 10}``), prefixed
        (``{"lineCounter.sizeLimit": 10}``) or nested under the section.
        Unknown keys are ignored; bad values fall back to the default.
        """
        raw: dict = {}
        nested = data.get(section)
        if isinstance(nested, dict):
            raw.update(nested)
        prefix = f"{section}."
        for key, value in data.items():
            if key == section:
                continue
            if key.startswith(prefix):
                raw[key[len(prefix):]] = value
            elif "." not in key:
                raw[key] = value

        known = {f.name: f for f in fields(cls)}
        defaults = cls()
        values = {}
        for key, value in raw.items():
            name = _snake_case(key)
            if name not in known:
                log.debug("ignoring unknown config key %r", key)
                continue
            coerced = _coerce(name, value, getattr(defaults, name))
            if coerced is not None:
                values[name] = coerced
        return replace(defaults, **values)

    def to_mapping(self) -> dict:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[_camel_case(f.name)] = list(value) if isinstance(value, tuple) else value
        return out


def load_config(path: str | Path | None = None) -> LineCountConfig:
    """
    Load a JSON settings file; falls back to $LINEBADGE_CONFIG, then defaults.

    A missing or unreadable file is logged and yields the defaults; a file
    that parses but is not an object is treated the same way.
    """
    if path is None:
        env = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if not env:
            return LineCountConfig()
        path = Path(env).expanduser()

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.warning("could not load config %s (%s); using defaults", path, e)
        return LineCountConfig()
    if not isinstance(data, dict):
        log.warning("config %s is not a JSON object; using defaults", path)
        return LineCountConfig()
    return LineCountConfig.from_mapping(data)


def _snake_case(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out).lstrip("_")


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _coerce(name: str, value, default):
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
    elif isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
    elif isinstance(default, tuple):
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return tuple(value)
    elif name == "display_format":
        if value in DISPLAY_FORMATS:
            return value
    elif isinstance(default, str) and isinstance(value, str):
        return value
    log.warning("invalid value for %s: %r (keeping %r)", _camel_case(name), value, default)
    return None
