"""Dependency usage checking via the ``depcheck`` analyzer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

from composer import Registry
from composer.errors import DependencyError, ExternalToolError
from composer.logging import get_logger
from composer.shell import run_tool

from .options import Options, coerce_options


TYPE_DEFINITION_PREFIX = "@types/"


def analyze(root: Path) -> Dict[str, Any]:
    """Run depcheck over ``root`` and return its JSON report.

    depcheck exits non-zero whenever it finds anything, so only output that
    is not a JSON object counts as a tool failure.
    """
    result = run_tool("depcheck", [str(root), "--json"], cwd=root, ok_codes=range(0, 256))
    try:
        report = json.loads(result.stdout)
    except ValueError as exc:
        raise ExternalToolError(result.command, result.returncode, result.output) from exc
    if not isinstance(report, dict):
        raise ExternalToolError(result.command, result.returncode, result.output)
    return report


def check_report(report: Mapping[str, Any], opts: Options) -> None:
    logger = get_logger("buildtasks.depcheck")

    invalid_files: Mapping[str, Any] = report.get("invalidFiles") or {}
    invalid_js = sorted(f for f in invalid_files if f.endswith(".js"))
    # Only script files are actionable; other sources are reported and tolerated.
    for f in sorted(set(invalid_files) - set(invalid_js)):
        logger.warning("Could not analyze %s: %s", f, invalid_files[f])
    if invalid_js:
        logger.error("Invalid files:")
        for f in invalid_js:
            logger.error("  %s: %s", f, invalid_files[f])
        raise DependencyError("Invalid files", invalid_js)

    unused = set(report.get("dependencies") or []) - set(opts.sticky_deps)
    if opts.ignore_type_definition_deps:
        unused = {dep for dep in unused if not dep.startswith(TYPE_DEFINITION_PREFIX)}
    if unused:
        names: List[str] = sorted(unused)
        logger.error("Unused dependencies: %s", ", ".join(names))
        raise DependencyError("Unused dependencies", names)


def depcheck(registry: Registry, options: Options | Mapping[str, Any] | None = None) -> None:
    opts = coerce_options(options)

    @registry.task("depcheck")
    def _depcheck() -> None:
        """Fail on unreachable script files or unused dependencies."""
        check_report(analyze(Path.cwd()), opts)
