import json
import logging
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from composer import Registry
from composer.errors import ExternalToolError
from composer.shell import ToolResult


TOOL_MODULES = [
    "buildtasks.dependencies",
    "buildtasks.linters",
    "buildtasks.compilation",
    "buildtasks.typings",
    "buildtasks.composite",
]


class FakeTools:
    """Stands in for `composer.shell.run_tool`, recording every invocation."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, List[str]]] = []
        self.responses: Dict[str, Tuple[int, str]] = {}

    def respond(self, name: str, returncode: int = 0, stdout: str = "") -> None:
        self.responses[name] = (returncode, stdout)

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def __call__(self, name, args, cwd, ok_codes=(0,)):
        self.calls.append((name, list(args)))
        returncode, stdout = self.responses.get(name, (0, ""))
        result = ToolResult(command=[name, *args], returncode=returncode, stdout=stdout, stderr="")
        if returncode not in set(ok_codes):
            raise ExternalToolError(result.command, returncode, result.output)
        return result


@pytest.fixture
def registry() -> Registry:
    return Registry(name="test")


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """An empty TypeScript project layout as the working directory."""
    (tmp_path / "tsconfig.json").write_text(
        json.dumps({"compilerOptions": {"outDir": "lib"}, "include": ["src/**/*.ts"]}),
        encoding="utf-8",
    )
    (tmp_path / "src").mkdir()
    (tmp_path / "test").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def tools(monkeypatch) -> FakeTools:
    fake = FakeTools()
    for module in TOOL_MODULES:
        monkeypatch.setattr(f"{module}.run_tool", fake)
    return fake


@pytest.fixture
def info_logs(caplog):
    caplog.set_level(logging.INFO)
    return caplog
