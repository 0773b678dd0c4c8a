"""Locating JSON tool configuration and loading the project YAML file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

import yaml

from .errors import ConfigNotFoundError, ConfigurationError
from .logging import get_logger


log = get_logger("composer.config")

PROJECT_CONFIG = "buildgraph.yaml"


def find_config(filename: str, search_dirs: Iterable[Path]) -> Tuple[Path, Any]:
    """Return the path and parsed contents of the first valid ``filename``.

    Directories are tried in order. A file that cannot be read or parsed is
    reported and skipped; when no directory yields a valid file
    :class:`ConfigNotFoundError` is raised.
    """
    searched: List[Path] = []
    for directory in search_dirs:
        candidate = Path(directory) / filename
        searched.append(Path(directory))
        if not candidate.is_file():
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as f:
                return candidate, json.load(f)
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unusable %s: %s", candidate, exc)
    raise ConfigNotFoundError(filename, searched)


def find_file(filename: str, search_dirs: Iterable[Path]) -> Path:
    """Return the first existing ``filename``; its contents are left to the tool that reads it."""
    searched: List[Path] = []
    for directory in search_dirs:
        candidate = Path(directory) / filename
        searched.append(Path(directory))
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(filename, searched)


@dataclass
class ProjectConfig:
    """Contents of ``buildgraph.yaml``: which setups to call and option overrides."""

    setup: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)


def load_project_config(path: str | Path, required: bool = False) -> ProjectConfig:
    p = Path(path)
    if not p.exists():
        if required:
            raise ConfigurationError(f"Config file does not exist: {p}")
        return ProjectConfig()
    with open(p, "r", encoding="utf-8") as f:
        try:
            payload = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {p}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"{p} must define a mapping at the top level")

    unknown = set(payload) - {"setup", "options"}
    if unknown:
        raise ConfigurationError(f"Unknown keys in {p}: {', '.join(sorted(unknown))}")

    setup = payload.get("setup") or []
    if isinstance(setup, str):
        setup = [setup]
    if not isinstance(setup, list) or not all(isinstance(s, str) for s in setup):
        raise ConfigurationError(f"'setup' in {p} must be a list of names")
    options = payload.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigurationError(f"'options' in {p} must be a mapping")
    return ProjectConfig(setup=list(setup), options=dict(options))
