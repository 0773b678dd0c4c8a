"""tslint / eslint tasks and the ``lint`` aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from composer import Registry
from composer.config import find_config
from composer.errors import LintViolationError
from composer.logging import get_logger
from composer.shell import run_tool

from .dependencies import depcheck
from .options import FileSelection, Options, coerce_options


PACKAGE_DIR = Path(__file__).resolve().parent


def config_search_dirs() -> List[Path]:
    """Where rulesets are looked for: the caller's directory, then ours."""
    return [Path.cwd(), PACKAGE_DIR]


@dataclass
class Linter:
    tool: str
    config_name: str
    # Exit code meaning "ran fine, found violations".
    violation_code: int
    extra_args: Sequence[str] = ()

    def args(self, config_path: Path, files: Sequence[Path]) -> List[str]:
        return ["--config", str(config_path), *self.extra_args, *(str(f) for f in files)]


TSLINT = Linter("tslint", "tslint.json", violation_code=2, extra_args=("--format", "verbose"))
ESLINT = Linter(
    "eslint", ".eslintrc.json", violation_code=1, extra_args=("--no-eslintrc", "--format", "stylish")
)


def run_linter(linter: Linter, config_path: Path, selection: FileSelection) -> None:
    """Lint every selected file, log the full report, then fail if anything was found."""
    logger = get_logger(f"buildtasks.{linter.tool}")
    root = Path.cwd()
    files = selection.resolve(root)
    if not files:
        logger.info("No files to lint for %s", ", ".join(selection.patterns))
        return
    result = run_tool(
        linter.tool,
        linter.args(config_path, files),
        cwd=root,
        ok_codes=(0, linter.violation_code),
    )
    for line in result.output.splitlines():
        logger.info(line)
    if result.returncode == linter.violation_code:
        raise LintViolationError(linter.tool, result.output)


def _register_linter(registry: Registry, linter: Linter, selection: FileSelection) -> None:
    config_path, _ = find_config(linter.config_name, config_search_dirs())

    registry.register(
        linter.tool,
        [],
        lambda: run_linter(linter, config_path, selection),
        description=f"Lint with {linter.tool} using {config_path}",
    )


def tslint(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    opts = coerce_options(options)
    _register_linter(registry, TSLINT, opts.ts_srcs)


def eslint(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    opts = coerce_options(options)
    _register_linter(registry, ESLINT, opts.js_srcs)


def lint(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    tslint(registry, options)
    eslint(registry, options)
    depcheck(registry, options)
    registry.register("lint", ["tslint", "eslint", "depcheck"], description="Run every linter")
