"""Compilation with ``tsc`` and copying of non-source data files."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, List, Mapping

from composer import Registry
from composer.config import find_file
from composer.logging import get_logger
from composer.shell import run_tool

from .linters import config_search_dirs
from .options import FileSelection, Options, coerce_options


def copy_data_files(selection: FileSelection, root: Path, out_dir: Path) -> List[Path]:
    """Copy selected files into ``out_dir`` keeping paths relative to the selection base."""
    base = selection.base(root)
    copied: List[Path] = []
    for src in selection.resolve(root):
        try:
            rel = src.relative_to(base)
        except ValueError:
            rel = src.relative_to(root)
        dest = out_dir / rel
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
        copied.append(dest)
    return copied


def build(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    opts = coerce_options(options)
    logger = get_logger("buildtasks.build")

    @registry.task("compile")
    def _compile() -> None:
        """Compile TypeScript sources with tsc."""
        tsconfig = find_file("tsconfig.json", config_search_dirs())
        run_tool("tsc", ["--project", str(tsconfig)], cwd=Path.cwd())

    @registry.task("build", ["compile"])
    def _build() -> None:
        """Copy data files next to the compiled output."""
        root = Path.cwd()
        copied = copy_data_files(opts.data_srcs, root, root / opts.out_dir)
        logger.info("Copied %d data file(s) into %s", len(copied), opts.out_dir)
