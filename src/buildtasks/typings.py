"""Fetching ancillary type definitions declared in ``typings.json``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Tuple

from composer import Registry
from composer.config import find_config
from composer.errors import ConfigurationError
from composer.logging import get_logger
from composer.shell import run_tool

from .linters import config_search_dirs
from .options import Options


MANIFEST = "typings.json"


def manifest_entries(manifest: Mapping[str, Any]) -> List[Tuple[str, str, bool]]:
    """``(name, source, is_global)`` for each declared type definition."""
    if not isinstance(manifest, Mapping):
        raise ConfigurationError(f"{MANIFEST} must contain a JSON object")
    entries: List[Tuple[str, str, bool]] = []
    for key, is_global in (("dependencies", False), ("globalDependencies", True)):
        section = manifest.get(key) or {}
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"'{key}' in {MANIFEST} must be an object")
        for name, source in sorted(section.items()):
            entries.append((name, str(source), is_global))
    return entries


def init(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    logger = get_logger("buildtasks.init")

    @registry.task("init")
    def _init() -> None:
        """Install type definitions into typings/."""
        manifest_path, manifest = find_config(MANIFEST, config_search_dirs())
        entries = manifest_entries(manifest)
        logger.info("Installing %d type definition(s) from %s", len(entries), manifest_path)
        for name, source, is_global in entries:
            args = ["install", f"{name}={source}"]
            if is_global:
                args.append("--global")
            run_tool("typings", args, cwd=Path.cwd())
