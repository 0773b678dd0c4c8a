"""Tasks that only register and sequence other tasks, plus ``test``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from composer import Registry
from composer.logging import get_logger
from composer.shell import run_tool

from .artifacts import clean
from .compilation import build
from .linters import lint
from .typings import init
from .options import Options, coerce_options


BUILD_ALL_SEQUENCE = ("clean", "lint", "build")


def build_all(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    clean(registry, options)
    lint(registry, options)
    build(registry, options)

    @registry.task("build-all")
    def _build_all() -> None:
        """Clean, lint and build, strictly in that order.

        The sequence is a fresh run: tasks an enclosing run already executed
        run again, since clean removes their output.
        """
        registry.run(*BUILD_ALL_SEQUENCE)


def test(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    opts = coerce_options(options)
    build_all(registry, opts)
    logger = get_logger("buildtasks.test")

    @registry.task("test", ["build"])
    def _test() -> None:
        """Run the mocha test suite."""
        root = Path.cwd()
        files = opts.test_srcs.resolve(root)
        if not files:
            logger.warning("No test files match %s", ", ".join(opts.test_srcs.patterns))
            return
        result = run_tool(
            "mocha",
            ["--ui", opts.test_ui, "--reporter", opts.test_reporter, *(str(f) for f in files)],
            cwd=root,
        )
        for line in result.output.splitlines():
            logger.info(line)


def generate_complete_taskgraph(
    registry: Registry, options: Options | Mapping[str, Any] | None = None
) -> None:
    test(registry, options)
    init(registry, options)
