"""Running the external build tools."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

from .errors import ExternalToolError
from .logging import get_logger


log = get_logger("composer.shell")


@dataclass
class ToolResult:
    command: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


def resolve_tool(name: str, cwd: Path) -> str:
    """Locate ``name`` in the project's ``node_modules/.bin``, then on PATH."""
    local_bin = Path(cwd) / "node_modules" / ".bin"
    local = shutil.which(name, path=str(local_bin)) if local_bin.is_dir() else None
    found = local or shutil.which(name)
    if not found:
        raise ExternalToolError([name], None, f"{name} not found in {local_bin} or on PATH")
    return found


def run_tool(
    name: str,
    args: Sequence[str],
    cwd: Path,
    ok_codes: Iterable[int] = (0,),
) -> ToolResult:
    """Run a tool to completion and return its captured output.

    A return code outside ``ok_codes`` raises :class:`ExternalToolError`.
    """
    command = [resolve_tool(name, cwd), *args]
    log.info("$ %s", " ".join([name, *args]))
    try:
        proc = subprocess.run(
            command,
            cwd=str(cwd),
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise ExternalToolError(command, None, str(exc)) from exc
    result = ToolResult(
        command=command, returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr
    )
    if result.returncode not in set(ok_codes):
        log.error("%s exited with code %d", name, result.returncode)
        for line in result.output.splitlines():
            log.error("  %s", line)
        raise ExternalToolError(command, result.returncode, result.output)
    return result
