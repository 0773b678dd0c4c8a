"""Removal of build artifacts."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Mapping

from composer import Registry
from composer.logging import get_logger

from .options import Options, coerce_options


def remove_artifact(path: Path) -> bool:
    """Delete a directory tree or file; returns False if nothing was there."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
        return True
    if path.exists() or path.is_symlink():
        path.unlink()
        return True
    return False


def clean(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    opts = coerce_options(options)
    logger = get_logger("buildtasks.clean")

    @registry.task("clean")
    def _clean() -> None:
        """Delete build artifacts."""
        root = Path.cwd()
        for artifact in opts.build_artifacts:
            target = root / artifact
            if remove_artifact(target):
                logger.info("Removed %s", target)
            else:
                logger.debug("Nothing to remove at %s", target)
