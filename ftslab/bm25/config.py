"""Settings of the BM25 fundamentals tool: defaults, loading and validation."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

_CONFIG_NAME = ".bm25-fundamentals"
_YAML_EXTS = ("yaml", "yml")


class ConfigError(ValueError):
    """The configuration could not be loaded or is invalid."""


@dataclass
class CorpusConfig:
    """Corpus generation settings."""

    size: int = 100
    batch_size: int = 1000


@dataclass
class SearchConfig:
    """Search settings."""

    max_results: int = 20
    term_freq_limit: int = 10


@dataclass
class DisplayConfig:
    """Display formatting settings."""

    score_precision: int = 4


@dataclass
class VisualizationConfig:
    """Histogram settings."""

    histogram_width: int = 50
    histogram_height: int = 10
    show_legend: bool = True


@dataclass
class AnalysisConfig:
    """Score analysis settings."""

    min_score_buckets: int = 10
    percentiles: list[int] = field(default_factory=lambda: [25, 50, 75, 90, 95, 99])


def _to_int(value: Any, key: str) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text, 0)
        except ValueError:
            pass
    raise ConfigError(f"failed to unmarshal config: cannot parse '{key}' as int: {value!r}")


_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        if value == "" or value in _FALSE:
            return False
        if value in _TRUE:
            return True
    raise ConfigError(f"failed to unmarshal config: cannot parse '{key}' as bool: {value!r}")


def _to_str(value: Any, key: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    raise ConfigError(f"failed to unmarshal config: cannot parse '{key}' as string: {value!r}")


def _to_int_list(value: Any, key: str) -> list[int]:
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",")]
        return [_to_int(part, key) for part in parts if part]
    if isinstance(value, (list, tuple)):
        return [_to_int(item, key) for item in value]
    return [_to_int(value, key)]


_TOP_FIELDS: dict[str, Callable[[Any, str], Any]] = {
    "database": _to_str,
    "verbose": _to_bool,
    "format": _to_str,
}

_SECTIONS: dict[str, dict[str, Callable[[Any, str], Any]]] = {
    "corpus": {"size": _to_int, "batch_size": _to_int},
    "search": {"max_results": _to_int, "term_freq_limit": _to_int},
    "display": {"score_precision": _to_int},
    "visualization": {
        "histogram_width": _to_int,
        "histogram_height": _to_int,
        "show_legend": _to_bool,
    },
    "analysis": {"min_score_buckets": _to_int, "percentiles": _to_int_list},
}


def _lower_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in data.items() if value is not None}


def _known_keys() -> list[str]:
    keys = list(_TOP_FIELDS)
    for section, fields in _SECTIONS.items():
        keys.extend(f"{section}.{name}" for name in fields)
    return keys


@dataclass
class Config:
    """Complete settings of the BM25 tool."""

    database: str = ":memory:"
    verbose: bool = False
    format: str = "text"
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    def validate(self) -> None:
        """Raise ConfigError describing the first invalid setting."""
        if self.format not in ("text", "json", "csv"):
            raise ConfigError(f"invalid format: {self.format} (must be text, json, or csv)")
        if self.corpus.size < 1:
            raise ConfigError("corpus size must be at least 1")
        if self.corpus.batch_size < 1:
            raise ConfigError("corpus batch size must be at least 1")
        if self.search.max_results < 1:
            raise ConfigError("max results must be at least 1")
        if self.visualization.histogram_width < 10:
            raise ConfigError("histogram width must be at least 10")
        if self.visualization.histogram_height < 3:
            raise ConfigError("histogram height must be at least 3")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from nested settings laid over the defaults; keys ignore case."""
        values = _lower_keys(data)
        defaults = cls()
        kwargs: dict[str, Any] = {}
        for key, convert in _TOP_FIELDS.items():
            kwargs[key] = convert(values[key], key) if key in values else getattr(defaults, key)
        for section, fields in _SECTIONS.items():
            base = getattr(defaults, section)
            raw = values.get(section)
            if raw is None:
                kwargs[section] = base
                continue
            if not isinstance(raw, Mapping):
                raise ConfigError(
                    f"failed to unmarshal config: '{section}' expected a map, got {raw!r}")
            raw = _lower_keys(raw)
            changes = {
                name: convert(raw[name], f"{section}.{name}")
                for name, convert in fields.items()
                if name in raw
            }
            kwargs[section] = replace(base, **changes)
        return cls(**kwargs)

    def resolved_database_path(self) -> str:
        """Return the database path with a leading ``~`` expanded to the home directory."""
        path = self.database
        if path == ":memory:" or not path.startswith("~"):
            return path
        try:
            home = str(Path.home())
        except (RuntimeError, KeyError) as exc:
            sys.stderr.write(f"Error getting home directory: {exc}\n")
            return path
        rest = path[1:].lstrip("/\\")
        return os.path.normpath(os.path.join(home, rest)) if rest else home


def _parse_file(path: Path, kind: str) -> dict[str, Any] | None:
    try:
        text = path.read_text(encoding="utf-8")
        if kind in _YAML_EXTS:
            data = yaml.safe_load(text)
        elif kind == "json":
            data = json.loads(text)
        else:
            return None
    except (OSError, ValueError, yaml.YAMLError):
        return None
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _read_config_file(config_file: str | os.PathLike | None) -> tuple[dict[str, Any], Path | None]:
    if config_file:
        path = Path(config_file)
        kind = path.suffix.lstrip(".").lower()
        data = _parse_file(path, kind) if path.is_file() else None
        return (data, path) if data is not None else ({}, None)
    directories: list[Path] = []
    try:
        directories.append(Path.home())
    except (RuntimeError, KeyError):
        pass
    directories.append(Path("."))
    for directory in directories:
        candidates = [directory / f"{_CONFIG_NAME}.{ext}" for ext in _YAML_EXTS]
        candidates.append(directory / _CONFIG_NAME)
        for candidate in candidates:
            if candidate.is_file():
                data = _parse_file(candidate, "yaml")
                if data is not None:
                    return data, candidate
    return {}, None


def _set_dotted(target: dict[str, Any], key: str, value: Any) -> None:
    *parents, leaf = key.lower().split(".")
    node = target
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value


def _merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        key = str(key).lower()
        if isinstance(value, Mapping) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        elif isinstance(value, Mapping):
            target[key] = {}
            _merge(target[key], value)
        else:
            target[key] = value


def load_config(
    config_file: str | os.PathLike | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load and validate settings: overrides beat environment, which beats the file.

    Without ``config_file``, ``.bm25-fundamentals`` (YAML) is looked for in the
    home directory and then the current directory. Override keys may be dotted
    (``corpus.size``); ``None`` values are ignored. Each setting may also come
    from an environment variable named by the upper-cased key.
    """
    env = os.environ if environ is None else environ
    merged: dict[str, Any] = {}
    file_data, used = _read_config_file(config_file)
    _merge(merged, file_data)
    for key in _known_keys():
        name = key.upper()
        if name in env:
            _set_dotted(merged, key, env[name])
    for key, value in (overrides or {}).items():
        if value is not None:
            _set_dotted(merged, key, value)

    config = Config.from_mapping(merged)
    if used is not None and config.verbose:
        sys.stderr.write(f"Using config file: {used}\n")
    config.validate()
    return config