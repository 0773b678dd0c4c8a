from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import typer

from .config import PROJECT_CONFIG, load_project_config
from .core import Registry
from .errors import BuildError
from .logging import get_logger, set_verbose


app = typer.Typer(add_completion=False, help="Shared build task runner")
log = get_logger("composer.cli")

DEFAULT_SETUP = ["complete"]


def build_registry(config: str, explicit: bool) -> Registry:
    """Create the registry and call the setup functions named in the config."""
    from buildtasks import SETUP_FUNCTIONS
    from buildtasks.options import coerce_options

    project = load_project_config(config, required=explicit)
    options = coerce_options(project.options)
    registry = Registry()
    for name in project.setup or DEFAULT_SETUP:
        setup = SETUP_FUNCTIONS.get(name)
        if setup is None:
            raise typer.BadParameter(
                f"Unknown setup {name!r}; choose from {', '.join(sorted(SETUP_FUNCTIONS))}",
                param_hint="setup",
            )
        setup(registry, options)
    return registry


def _prepare(cwd: Optional[str], config: Optional[str], log_file: Optional[str]) -> Registry:
    if cwd:
        os.chdir(cwd)
    if log_file:
        get_logger("composer", Path(log_file))
        get_logger("buildtasks", Path(log_file))
    try:
        return build_registry(config or PROJECT_CONFIG, explicit=config is not None)
    except BuildError as e:
        log.error("%s", e)
        raise typer.Exit(code=1)


CwdOption = typer.Option(None, "--cwd", help="Project directory to run in")
ConfigOption = typer.Option(None, "--config", help=f"Path to YAML config (default {PROJECT_CONFIG})")
LogFileOption = typer.Option(None, "--log-file", help="Also write logs to this file")


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """Shared build task runner."""
    set_verbose(verbose)


@app.command("list")
def list_tasks(
    cwd: Optional[str] = CwdOption,
    config: Optional[str] = ConfigOption,
    log_file: Optional[str] = LogFileOption,
):
    """List registered tasks."""
    registry = _prepare(cwd, config, log_file)
    typer.echo("Registered tasks:")
    for spec in sorted(registry, key=lambda s: s.name):
        deps = f" <- {', '.join(spec.deps)}" if spec.deps else ""
        typer.echo(f"- {spec.name}{deps}")


@app.command()
def graph(
    tasks: List[str] = typer.Argument(None, help="Tasks to plan (default build-all)"),
    cwd: Optional[str] = CwdOption,
    config: Optional[str] = ConfigOption,
    log_file: Optional[str] = LogFileOption,
):
    """Print the order in which tasks would run."""
    registry = _prepare(cwd, config, log_file)
    try:
        order = registry.plan(*(tasks or ["build-all"]))
    except BuildError as e:
        log.error("%s", e)
        raise typer.Exit(code=1)
    for i, name in enumerate(order, start=1):
        typer.echo(f"{i}. {name}")


@app.command()
def run(
    tasks: List[str] = typer.Argument(None, help="Tasks to run in order (default build-all)"),
    cwd: Optional[str] = CwdOption,
    config: Optional[str] = ConfigOption,
    log_file: Optional[str] = LogFileOption,
):
    """Run tasks in the given order, each after its prerequisites."""
    registry = _prepare(cwd, config, log_file)
    try:
        registry.run(*(tasks or ["build-all"]))
    except BuildError as e:
        log.error("%s", e)
        raise typer.Exit(code=1)


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
